import httpx
import pytest

from schwabmd.client import MarketDataClient
from schwabmd.errors import APIError
from schwabmd.instruments import (
    Instrument,
    InstrumentNotFoundError,
    InstrumentProjection,
    InstrumentResponse,
)

RECORDED_INSTRUMENT_BY_CUSIP_RESPONSE = """{
  "instruments": [
    {
      "cusip": "037833100",
      "symbol": "AAPL",
      "description": "Apple Inc",
      "exchange": "NASDAQ",
      "assetType": "EQUITY"
    }
  ]
}"""

APPLE = {
    "cusip": "037833100",
    "symbol": "AAPL",
    "description": "Apple Inc",
    "exchange": "NASDAQ",
    "assetType": "EQUITY",
}


def make_client(handler, seen):
    def record(request):
        seen.append(request)
        return handler(request)

    return MarketDataClient(
        base_url="https://api.example.com",
        token="token",
        http_client=httpx.Client(transport=httpx.MockTransport(record)),
    )


def test_search_instruments():
    seen = []
    client = make_client(lambda r: httpx.Response(200, json={"instruments": [APPLE]}), seen)

    result = client.search_instruments("AAPL", InstrumentProjection.SYMBOL_SEARCH)

    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/marketdata/v1/instruments"
    assert request.headers["Authorization"] == "Bearer token"
    assert request.url.params["symbol"] == "AAPL"
    assert request.url.params["projection"] == "symbol-search"

    assert len(result.instruments) == 1
    inst = result.instruments[0]
    assert inst.cusip == "037833100"
    assert inst.symbol == "AAPL"
    assert inst.description == "Apple Inc"
    assert inst.exchange == "NASDAQ"
    assert inst.asset_type == "EQUITY"


def test_search_instruments_fundamental():
    seen = []
    payload = {
        "instruments": [
            {
                **APPLE,
                "fundamental": {
                    "symbol": "AAPL",
                    "high52": 199.62,
                    "low52": 124.17,
                    "dividendAmount": 0.24,
                    "dividendYield": 0.45,
                    "peRatio": 28.5,
                    "beta": 1.2,
                    "marketCap": 2800000000000.0,
                    "epsTTM": 6.05,
                    "returnOnEquity": 0.85,
                    "currentRatio": 1.08,
                },
            }
        ]
    }
    client = make_client(lambda r: httpx.Response(200, json=payload), seen)

    result = client.search_instruments("AAPL", InstrumentProjection.FUNDAMENTAL)

    assert seen[0].url.params["projection"] == "fundamental"
    assert len(result.instruments) == 1
    inst = result.instruments[0]
    assert inst.symbol == "AAPL"
    fund = inst.fundamental
    assert fund is not None
    assert fund.symbol == "AAPL"
    assert fund.high52 == pytest.approx(199.62)
    assert fund.low52 == pytest.approx(124.17)
    assert fund.dividend_amount == pytest.approx(0.24)
    assert fund.dividend_yield == pytest.approx(0.45)
    assert fund.pe_ratio == pytest.approx(28.5)
    assert fund.beta == pytest.approx(1.2)
    assert fund.market_cap == pytest.approx(2800000000000.0)
    assert fund.eps_ttm == pytest.approx(6.05)
    assert fund.return_on_equity == pytest.approx(0.85)
    assert fund.current_ratio == pytest.approx(1.08)


def test_get_instrument_by_cusip():
    seen = []
    client = make_client(lambda r: httpx.Response(200, json={"instruments": [APPLE]}), seen)

    result = client.get_instrument_by_cusip("037833100")

    assert seen[0].method == "GET"
    assert seen[0].url.path == "/marketdata/v1/instruments/037833100"
    assert seen[0].headers["Authorization"] == "Bearer token"
    assert result.cusip == "037833100"
    assert result.symbol == "AAPL"
    assert result.description == "Apple Inc"
    assert result.exchange == "NASDAQ"
    assert result.asset_type == "EQUITY"


def test_get_instrument_by_cusip_recorded_wrapped_response():
    seen = []
    client = make_client(
        lambda r: httpx.Response(
            200,
            content=RECORDED_INSTRUMENT_BY_CUSIP_RESPONSE.encode(),
            headers={"Content-Type": "application/json"},
        ),
        seen,
    )

    result = client.get_instrument_by_cusip("037833100")

    assert seen[0].url.path == "/marketdata/v1/instruments/037833100"
    assert result.cusip == "037833100"
    assert result.symbol == "AAPL"
    assert result.asset_type == "EQUITY"


def test_get_instrument_by_cusip_empty_instruments():
    seen = []
    client = make_client(lambda r: httpx.Response(200, json={"instruments": []}), seen)

    with pytest.raises(InstrumentNotFoundError, match="no instrument found for CUSIP"):
        client.get_instrument_by_cusip("000000000")
    assert seen[0].url.path == "/marketdata/v1/instruments/000000000"


def test_search_instruments_error():
    client = make_client(lambda r: httpx.Response(404), [])

    with pytest.raises(APIError) as info:
        client.search_instruments("INVALID", InstrumentProjection.SYMBOL_SEARCH)
    assert info.value.status_code == 404


def test_get_instrument_by_cusip_error():
    client = make_client(lambda r: httpx.Response(404), [])

    with pytest.raises(APIError) as info:
        client.get_instrument_by_cusip("INVALID")
    assert info.value.status_code == 404


def test_instrument_nested_info():
    inst = Instrument.from_dict(
        {
            **APPLE,
            "bondPrice": 99.5,
            "bondInstrumentInfo": {"bondFactor": "1.0", "bondPrice": 100.25, "cusip": "X1"},
            "instrumentInfo": {"symbol": "AAPL", "type": "COMMON"},
        }
    )
    assert inst.bond_price == pytest.approx(99.5)
    assert inst.bond_instrument_info.bond_factor == "1.0"
    assert inst.bond_instrument_info.bond_price == pytest.approx(100.25)
    assert inst.instrument_info.type == "COMMON"
    assert inst.fundamental is None


def test_instrument_response_rejects_non_list():
    with pytest.raises(ValueError):
        InstrumentResponse.from_dict({"instruments": "nope"})