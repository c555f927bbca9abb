# schwabmd

A small, typed, synchronous client for the Schwab Market Data API. It builds
authenticated `GET` requests with `httpx`, checks every response, and turns
the JSON that comes back into dataclasses.

## Installation

```
pip install schwabmd
```

To run the test suite as well:

```
pip install "schwabmd[test]"
pytest
```

## Getting started

```python
from schwabmd.client import MarketDataClient
from schwabmd.chains import OptionChainParams
from schwabmd.enums import OptionChainContractType, OptionChainRange

with MarketDataClient(token="token") as client:
    chain = client.get_option_chain(
        OptionChainParams(
            symbol="SPY",
            contract_type=OptionChainContractType.CALL,
            strike_count=2,
            strike_range=OptionChainRange.NEAR_THE_MONEY,
        )
    )
    for expiry, strikes in chain.call_exp_date_map.items():
        for strike, contracts in strikes.items():
            print(expiry, strike, contracts[0].mark_price)
```

## Configuring the client

`MarketDataClient` (built on `schwabmd.session.BaseClient`) takes these
keyword arguments:

- `base_url`: requests go to `https://api.schwabapi.com/marketdata/v1` by
  default. Give another absolute URL to use a different host or a proxy
  path. The `/marketdata/v1` prefix is added only once, so a base URL that
  already ends with it is used as it is. A URL without a scheme and host is
  not rejected at construction; every request made with it raises
  `ValueError` before anything is sent.
- `token`: a fixed bearer token, sent as `Authorization: Bearer <token>`.
- `token_provider`: in place of a fixed token, any object with a `token()`
  method (see `schwabmd.transport.TokenProvider`). It is asked for a token on
  every request; an empty token raises `ValueError`.
- `http_client`: an `httpx.Client` to send requests with. If you do not give
  one, the client creates its own and closes it on `close()` or when the
  `with` block ends.
- `response_body_limit`: the largest response body accepted, in bytes
  (10 MiB by default).
- `headers` and `user_agent`: extra headers for every request. `Accept`,
  `Authorization` and `Content-Type` are always set by the client and cannot
  be overridden this way.

## What the client can do

| Method | Endpoint | Returns |
| --- | --- | --- |
| `get_option_chain(params)` | `GET /chains` | `chains.OptionChain` |
| `get_expiration_chain(symbol)` | `GET /expirationchain` | `expirationchain.ExpirationChain` |
| `get_market_hours(markets, date="")` | `GET /markets` | `dict[str, dict[str, hours.MarketHours]]` |
| `get_market_hours_single(market_id, date="")` | `GET /markets/{market_id}` | `dict[str, dict[str, hours.MarketHours]]` |
| `get_movers(symbol_id, sort=None, frequency=None)` | `GET /movers/{symbol_id}` | `movers.MoverResponse` |
| `search_instruments(symbol, projection)` | `GET /instruments` | `instruments.InstrumentResponse` |
| `get_instrument_by_cusip(cusip_id)` | `GET /instruments/{cusip}` | `instruments.Instrument` |
| `get_price_history(symbol, params=None)` | `GET /pricehistory` | `pricehistory.CandleList` |

Notes on the parameters:

- `OptionChainParams` requires a `symbol`; a missing one raises `ValueError`.
  Its other fields, like those of `pricehistory.PriceHistoryParams`, are sent
  only when set: `None`, empty strings and numeric zero are left out of the
  query.
- `get_movers` sends `sort` (a `movers.MoverSort` or string) only when given,
  and `frequency` whenever it is not `None`, including `0`.
- Market hours accept only the markets `equity`, `option`, `bond`, `future`
  and `forex` (`enums.MarketID` or plain strings), each at most once. A date,
  if you give one, must be in `YYYY-MM-DD` form and fall between today and one
  year from today, inclusive. A bad market or a bad date raises `ValueError`
  before any request is sent. `hours.validate_market_ids`,
  `hours.validate_market_id` and `hours.validate_market_hours_date` perform
  these checks on their own.

Response models use snake_case field names. Fields typed with an enum from
`schwabmd.enums` hold the enum member when the value is known and the raw
string otherwise. Option contracts also accept the short price names `bid`,
`ask`, `last` and `mark` (as numbers or numeric strings) and a `tradeDate`
given either as a string or a number.

## Errors

- A response whose status is not 2xx raises `schwabmd.errors.APIError`. It
  carries `status_code`, `message` and the raw `body`. The message is taken
  from the `detail` or `title` field of the error JSON when there is one, and
  otherwise from the standard HTTP reason phrase.
- A success response with a non-empty body that is not `application/json`,
  or that is malformed or does not fit the expected shape, raises
  `schwabmd.errors.ResponseError`. `ResponseTooLargeError` is the subclass
  raised when the body exceeds the response body limit.
- `get_instrument_by_cusip` raises
  `schwabmd.instruments.InstrumentNotFoundError` (a `LookupError`) when no
  instrument matches.

## What this package does not do

- It has no quote endpoint; `enums.QuoteType` is defined but no method fetches
  quotes.
- It covers market data only: no accounts, orders or other trading endpoints.
- It does not obtain or refresh access tokens; supply a token or a
  `token_provider` yourself.
- It has no streaming support and no asynchronous client.