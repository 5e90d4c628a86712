from __future__ import annotations

from dataclasses import dataclass

from app.registry.symbols import INDICATOR_SYMBOLS, STOCK_SYMBOLS
from app.schemas.indicators import IndicatorQuote
from app.schemas.quotes import SymbolDescriptor
from app.schemas.stocks import StockQuote


@dataclass(frozen=True)
class Pipeline:
    """One dashboard feed: which symbols to fetch and how to present the outcome."""

    name: str
    registry: tuple[SymbolDescriptor, ...]
    quote_model: type[StockQuote] | type[IndicatorQuote]
    group_by_category: bool
    unavailable_message: str
    error_message: str


STOCKS = Pipeline(
    name="stocks",
    registry=STOCK_SYMBOLS,
    quote_model=StockQuote,
    group_by_category=False,
    unavailable_message="Unable to fetch stock data from API",
    error_message="An unexpected error occurred while fetching stock data",
)

ECONOMIC = Pipeline(
    name="economic",
    registry=INDICATOR_SYMBOLS,
    quote_model=IndicatorQuote,
    group_by_category=True,
    unavailable_message="Unable to fetch economic indicator data from API",
    error_message="An unexpected error occurred while fetching economic data",
)
