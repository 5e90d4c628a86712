from __future__ import annotations

import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.schemas.quotes import QuoteFailure, QuoteResult


class IndicatorQuote(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    symbol: str
    name: str
    type: str
    description: str | None = None
    value: float | None = None
    previous_close: float | None = None
    change: float | None = None
    change_percent: float | None = None
    high: float | None = None
    low: float | None = None
    error: str | None = None
    timestamp: datetime.datetime

    @classmethod
    def from_result(cls, result: QuoteResult) -> IndicatorQuote:
        descriptor = result.descriptor
        if isinstance(result, QuoteFailure):
            return cls(
                symbol=descriptor.symbol,
                name=descriptor.name,
                type=descriptor.category,
                description=descriptor.description,
                value=None,
                error=result.error,
                timestamp=result.timestamp,
            )
        return cls(
            symbol=descriptor.symbol,
            name=descriptor.name,
            type=descriptor.category,
            description=descriptor.description,
            value=result.value,
            previous_close=result.previous_close,
            change=result.change,
            change_percent=result.change_percent,
            high=result.high,
            low=result.low,
            timestamp=result.timestamp,
        )
