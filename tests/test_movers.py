import httpx
import pytest

from schwabmd.errors import APIError, ResponseError
from schwabmd.movers import MoverResponse, MoverSort, MoversMixin, Screener
from schwabmd.session import BaseClient


class _Client(MoversMixin, BaseClient):
    pass


def _make_client(handler):
    return _Client(
        base_url="https://api.example.com",
        token="token",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def _empty_handler(seen):
    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"screeners": []})

    return handler


def test_get_movers():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "screeners": [
                    {
                        "symbol": "AAPL",
                        "description": "Apple Inc.",
                        "direction": "up",
                        "last": 150.25,
                        "change": 2.50,
                        "netPercentChange": 1.69,
                        "marketShare": 0.05,
                        "totalVolume": 50000000,
                        "trades": 1000000,
                    },
                    {
                        "symbol": "MSFT",
                        "description": "Microsoft Corporation",
                        "direction": "up",
                        "last": 380.50,
                        "change": 3.75,
                        "netPercentChange": 0.99,
                        "marketShare": 0.04,
                        "totalVolume": 40000000,
                        "trades": 900000,
                    },
                ]
            },
        )

    client = _make_client(handler)
    result = MoversMixin.get_movers(client, "$DJI")

    assert seen[0].method == "GET"
    assert seen[0].url.path == "/marketdata/v1/movers/$DJI"
    assert seen[0].headers["Authorization"] == "Bearer token"

    assert len(result.screeners) == 2
    first = result.screeners[0]
    assert first.symbol == "AAPL"
    assert first.description == "Apple Inc."
    assert first.last == pytest.approx(150.25)
    assert first.change == pytest.approx(2.50)
    assert first.direction == "up"
    assert first.net_percent_change == pytest.approx(1.69)
    assert first.market_share == pytest.approx(0.05)
    assert first.total_volume == 50000000
    assert first.trades == 1000000

    second = result.screeners[1]
    assert second.symbol == "MSFT"
    assert second.description == "Microsoft Corporation"
    assert second.last == pytest.approx(380.50)


def test_get_movers_with_sort():
    seen = []
    client = _make_client(_empty_handler(seen))
    result = MoversMixin.get_movers(client, "$COMPX", MoverSort.VOLUME)
    assert seen[0].url.path == "/marketdata/v1/movers/$COMPX"
    assert seen[0].url.params["sort"] == "VOLUME"
    assert result.screeners == []


def test_get_movers_with_frequency():
    seen = []
    client = _make_client(_empty_handler(seen))
    result = MoversMixin.get_movers(client, "$SPX", frequency=60)
    assert seen[0].url.path == "/marketdata/v1/movers/$SPX"
    assert seen[0].url.params["frequency"] == "60"
    assert result.screeners == []


def test_get_movers_frequency_zero():
    seen = []
    client = _make_client(_empty_handler(seen))
    result = MoversMixin.get_movers(client, "$DJI", frequency=0)
    assert seen[0].url.params["frequency"] == "0"
    assert result.screeners == []


def test_get_movers_no_optional_params():
    seen = []
    client = _make_client(_empty_handler(seen))
    result = MoversMixin.get_movers(client, "$DJI", "", None)
    assert "sort" not in seen[0].url.params
    assert "frequency" not in seen[0].url.params
    assert result.screeners == []


def test_get_movers_error():
    client = _make_client(lambda request: httpx.Response(404))
    with pytest.raises(APIError) as excinfo:
        MoversMixin.get_movers(client, "$DJI")
    assert excinfo.value.status_code == 404


def test_get_movers_bad_payload():
    client = _make_client(lambda request: httpx.Response(200, json={"screeners": {}}))
    with pytest.raises(ResponseError, match="decode response body"):
        MoversMixin.get_movers(client, "$DJI")


def test_mover_response_from_dict_defaults():
    assert MoverResponse.from_dict({}) == MoverResponse(screeners=[])
    assert Screener.from_dict({"symbol": "IBM"}) == Screener(symbol="IBM")