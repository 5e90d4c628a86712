from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UpstreamQuote(BaseModel):
    """Finnhub `/quote` payload: c=current, pc=previous close, h/l/o=day high/low/open, t=epoch."""

    model_config = ConfigDict(extra="ignore")

    c: float
    pc: float
    h: float | None = None
    l: float | None = None
    o: float | None = None
    d: float | None = None
    dp: float | None = None
    t: int = 0

    @property
    def is_empty(self) -> bool:
        return self.c == 0 and self.t == 0
