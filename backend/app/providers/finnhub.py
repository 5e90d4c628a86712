from __future__ import annotations

import asyncio
import datetime
import logging
from collections.abc import Awaitable, Callable

import aiohttp
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_incrementing,
)

from app.config.settings import settings
from app.providers.errors import (
    MalformedQuoteError,
    NoDataError,
    QuoteFetchError,
    RateLimitedError,
    UpstreamConnectionError,
    UpstreamStatusError,
    UpstreamTimeoutError,
)
from app.schemas.provider import UpstreamQuote
from app.schemas.quotes import QuoteSuccess, SymbolDescriptor, percent_change

logger = logging.getLogger(__name__)

_QUOTE_PATH = "/api/v1/quote"

# 1s, 2s, 3s ... after a 429; 0.5s, 1s, 2s ... after any other failure.
_RATE_LIMIT_WAIT = wait_incrementing(start=1, increment=1)
_FAILURE_WAIT = wait_exponential(multiplier=0.5, exp_base=2)


def _build_url(path: str) -> str:
    return f"{settings.providers.finnhub_base_url.rstrip('/')}{path}"


def _backoff(retry_state: RetryCallState) -> float:
    outcome = retry_state.outcome
    if outcome is not None and isinstance(outcome.exception(), RateLimitedError):
        return _RATE_LIMIT_WAIT(retry_state)
    return _FAILURE_WAIT(retry_state)


async def _read_text(response: aiohttp.ClientResponse) -> str:
    try:
        return await response.text()
    except (aiohttp.ClientError, UnicodeDecodeError):
        return "Unknown error"


async def _request_quote(
    session: aiohttp.ClientSession, symbol: str, api_key: str, timeout_seconds: float
) -> UpstreamQuote:
    try:
        async with session.get(
            _build_url(_QUOTE_PATH),
            params={"symbol": symbol, "token": api_key},
            headers={"Accept": "application/json"},
            timeout=aiohttp.ClientTimeout(total=timeout_seconds),
        ) as response:
            if response.status == 429:
                raise RateLimitedError(symbol, await _read_text(response))
            if not 200 <= response.status < 300:
                raise UpstreamStatusError(symbol, response.status, await _read_text(response))
            payload = await response.json(content_type=None)
    except asyncio.TimeoutError as exc:
        raise UpstreamTimeoutError(symbol, timeout_seconds) from exc
    except aiohttp.ClientError as exc:
        raise UpstreamConnectionError(symbol, str(exc) or type(exc).__name__) from exc
    except ValueError as exc:
        raise MalformedQuoteError(symbol, "response is not valid JSON") from exc

    if not isinstance(payload, dict):
        raise MalformedQuoteError(symbol, "expected a JSON object")
    try:
        quote = UpstreamQuote.model_validate(payload)
    except ValidationError as exc:
        raise MalformedQuoteError(symbol, f"{exc.error_count()} invalid field(s)") from exc

    if quote.is_empty:
        raise NoDataError(symbol)
    return quote


async def fetch_quote(
    session: aiohttp.ClientSession,
    descriptor: SymbolDescriptor,
    api_key: str,
    max_retries: int | None = None,
    *,
    timeout_seconds: float | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> QuoteSuccess:
    """Fetch the current quote for one symbol, retrying transient and permanent failures alike.

    Raises the last attempt's QuoteFetchError once retries are exhausted; turning that into
    a failure result is the caller's job.
    """
    if max_retries is None:
        max_retries = settings.providers.quote_max_retries
    if timeout_seconds is None:
        timeout_seconds = settings.providers.quote_timeout_seconds

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=_backoff,
        retry=retry_if_exception_type(QuoteFetchError),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        sleep=sleep,
        reraise=True,
    )
    quote = await retrying(_request_quote, session, descriptor.symbol, api_key, timeout_seconds)

    change = quote.c - quote.pc
    return QuoteSuccess(
        descriptor=descriptor,
        value=quote.c,
        previous_close=quote.pc,
        change=change,
        change_percent=percent_change(change, quote.pc),
        high=quote.h,
        low=quote.l,
        timestamp=datetime.datetime.now(datetime.UTC),
    )
