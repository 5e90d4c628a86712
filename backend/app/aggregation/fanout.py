from __future__ import annotations

import asyncio
import datetime
import logging
from collections.abc import Awaitable, Callable, Sequence

import aiohttp

from app.providers import finnhub
from app.providers.errors import QuoteFetchError
from app.schemas.quotes import (
    QuoteFailure,
    QuoteResult,
    QuoteSuccess,
    ResponseEnvelope,
    SymbolDescriptor,
)

logger = logging.getLogger(__name__)

QuoteFetcher = Callable[[aiohttp.ClientSession, SymbolDescriptor, str], Awaitable[QuoteSuccess]]


async def _settle(
    fetcher: QuoteFetcher,
    session: aiohttp.ClientSession,
    descriptor: SymbolDescriptor,
    api_key: str,
    timestamp: datetime.datetime,
) -> QuoteResult:
    try:
        return await fetcher(session, descriptor, api_key)
    except QuoteFetchError as exc:
        logger.error("[fanout] error fetching symbol=%s err=%s", descriptor.symbol, exc)
        return QuoteFailure(descriptor=descriptor, error=str(exc), timestamp=timestamp)


async def _fan_out(
    registry: Sequence[SymbolDescriptor],
    api_key: str,
    fetcher: QuoteFetcher,
    session: aiohttp.ClientSession,
) -> ResponseEnvelope:
    timestamp = datetime.datetime.now(datetime.UTC)
    # Tasks are index-aligned with the registry, whatever the completion order. A fault in
    # one of them cancels the rest before the session is closed.
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(_settle(fetcher, session, descriptor, api_key, timestamp))
                for descriptor in registry
            ]
    except ExceptionGroup as exc_group:
        raise exc_group.exceptions[0]
    return ResponseEnvelope(timestamp=timestamp, results=[task.result() for task in tasks])


async def aggregate_all(
    registry: Sequence[SymbolDescriptor],
    api_key: str,
    *,
    fetcher: QuoteFetcher | None = None,
    session: aiohttp.ClientSession | None = None,
) -> ResponseEnvelope:
    """Fetch every registry symbol concurrently and wait for all of them to settle.

    Per-symbol QuoteFetchErrors become QuoteFailure entries; any other exception is a
    fault and propagates to the caller.
    """
    if fetcher is None:
        fetcher = finnhub.fetch_quote
    logger.info("[fanout] fetching quotes for %d symbols", len(registry))
    if session is not None:
        return await _fan_out(registry, api_key, fetcher, session)
    async with aiohttp.ClientSession() as owned_session:
        return await _fan_out(registry, api_key, fetcher, owned_session)
