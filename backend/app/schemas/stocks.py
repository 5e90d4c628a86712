from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.schemas.quotes import QuoteFailure, QuoteResult


class StockQuote(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ticker: str
    company_name: str
    sector: str
    price: float | None = None
    previous_close: float | None = None
    change: float | None = None
    change_percent: float | None = None
    high: float | None = None
    low: float | None = None
    error: str | None = None
    timestamp: datetime.datetime

    @classmethod
    def from_result(cls, result: QuoteResult) -> StockQuote:
        descriptor = result.descriptor
        if isinstance(result, QuoteFailure):
            return cls(
                ticker=descriptor.symbol,
                company_name=descriptor.name,
                sector=descriptor.category,
                price=None,
                error=result.error,
                timestamp=result.timestamp,
            )
        return cls(
            ticker=descriptor.symbol,
            company_name=descriptor.name,
            sector=descriptor.category,
            price=result.value,
            previous_close=result.previous_close,
            change=result.change,
            change_percent=result.change_percent,
            high=result.high,
            low=result.low,
            timestamp=result.timestamp,
        )
