from __future__ import annotations

import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel

QuoteT = TypeVar("QuoteT", bound=BaseModel)


class QuotesResponse(BaseModel, Generic[QuoteT]):
    success: bool
    timestamp: datetime.datetime
    data: list[QuoteT]
    grouped: dict[str, list[QuoteT]] | None = None


class ServiceUnavailableResponse(BaseModel, Generic[QuoteT]):
    error: str
    message: str
    data: list[QuoteT]


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: str | None = None
