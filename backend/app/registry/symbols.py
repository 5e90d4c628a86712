from __future__ import annotations

from app.schemas.quotes import SymbolDescriptor


def build_registry(*descriptors: SymbolDescriptor) -> tuple[SymbolDescriptor, ...]:
    seen: set[str] = set()
    for descriptor in descriptors:
        if descriptor.symbol in seen:
            raise ValueError(f"Duplicate symbol in registry: {descriptor.symbol}")
        seen.add(descriptor.symbol)
    return tuple(descriptors)


def _stock(symbol: str, name: str, sector: str) -> SymbolDescriptor:
    return SymbolDescriptor(symbol=symbol, name=name, category=sector)


def _indicator(symbol: str, name: str, kind: str, description: str) -> SymbolDescriptor:
    return SymbolDescriptor(symbol=symbol, name=name, category=kind, description=description)


STOCK_SYMBOLS = build_registry(
    # Technology
    _stock("AAPL", "Apple Inc.", "Technology"),
    _stock("MSFT", "Microsoft Corporation", "Technology"),
    _stock("GOOGL", "Alphabet Inc.", "Technology"),
    _stock("META", "Meta Platforms Inc.", "Technology"),
    _stock("NVDA", "NVIDIA Corporation", "Technology"),
    # Healthcare
    _stock("JNJ", "Johnson & Johnson", "Healthcare"),
    _stock("UNH", "UnitedHealth Group", "Healthcare"),
    _stock("PFE", "Pfizer Inc.", "Healthcare"),
    # Finance
    _stock("JPM", "JPMorgan Chase & Co.", "Finance"),
    _stock("BAC", "Bank of America Corp.", "Finance"),
    _stock("GS", "Goldman Sachs Group", "Finance"),
    # Energy
    _stock("XOM", "Exxon Mobil Corporation", "Energy"),
    _stock("CVX", "Chevron Corporation", "Energy"),
    # Consumer/Retail
    _stock("AMZN", "Amazon.com Inc.", "Consumer"),
    _stock("WMT", "Walmart Inc.", "Consumer"),
    _stock("COST", "Costco Wholesale", "Consumer"),
    # Industrial
    _stock("BA", "Boeing Company", "Industrial"),
    _stock("CAT", "Caterpillar Inc.", "Industrial"),
)


INDICATOR_SYMBOLS = build_registry(
    _indicator("^GSPC", "S&P 500", "Index", "US Large Cap Index"),
    _indicator("^DJI", "Dow Jones Industrial Average", "Index", "US Blue Chip Index"),
    _indicator("^IXIC", "NASDAQ Composite", "Index", "US Tech-Heavy Index"),
    _indicator("^RUT", "Russell 2000", "Index", "US Small Cap Index"),
    _indicator("^VIX", "CBOE Volatility Index", "Volatility", "Market Fear Gauge"),
    _indicator("^TNX", "US 10-Year Treasury Yield", "Bonds", "10-Year Bond Yield"),
    _indicator("GC=F", "Gold Futures", "Commodities", "Gold Price"),
    _indicator("CL=F", "Crude Oil WTI", "Commodities", "Oil Price"),
)
