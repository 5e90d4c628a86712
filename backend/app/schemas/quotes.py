from __future__ import annotations

import datetime
import math

from pydantic import BaseModel, ConfigDict, Field


class SymbolDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str
    category: str
    description: str | None = None


class QuoteSuccess(BaseModel):
    descriptor: SymbolDescriptor
    value: float
    previous_close: float
    change: float
    change_percent: float
    high: float | None = None
    low: float | None = None
    timestamp: datetime.datetime


class QuoteFailure(BaseModel):
    descriptor: SymbolDescriptor
    error: str
    timestamp: datetime.datetime


QuoteResult = QuoteSuccess | QuoteFailure


class ResponseEnvelope(BaseModel):
    timestamp: datetime.datetime
    results: list[QuoteResult] = Field(default_factory=list)

    @property
    def successes(self) -> list[QuoteSuccess]:
        return [result for result in self.results if isinstance(result, QuoteSuccess)]

    @property
    def all_failed(self) -> bool:
        return not self.successes

    def grouped(self) -> dict[str, list[QuoteSuccess]]:
        groups: dict[str, list[QuoteSuccess]] = {}
        for result in self.successes:
            groups.setdefault(result.descriptor.category, []).append(result)
        return groups


def percent_change(change: float, previous_close: float) -> float:
    # A zero previous close yields NaN (serialized as null) rather than an error.
    if previous_close == 0:
        return math.nan
    return change / previous_close * 100
