"""Domain models for currency conversion."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ConversionStatus(str, Enum):
    """Freshness of the conversion rate currently in use."""

    IDLE = "idle"
    LOADING = "loading"
    FRESH = "fresh"
    STALE = "stale"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ConversionState:
    """Conversion status, with the trade date for fresh and stale rates."""

    status: ConversionStatus
    published_date: str | None = None

    @classmethod
    def idle(cls) -> "ConversionState":
        return cls(ConversionStatus.IDLE)

    @classmethod
    def loading(cls) -> "ConversionState":
        return cls(ConversionStatus.LOADING)

    @classmethod
    def fresh(cls, published_date: str) -> "ConversionState":
        return cls(ConversionStatus.FRESH, published_date)

    @classmethod
    def stale(cls, published_date: str) -> "ConversionState":
        return cls(ConversionStatus.STALE, published_date or "cached")

    @classmethod
    def unavailable(cls) -> "ConversionState":
        return cls(ConversionStatus.UNAVAILABLE)


@dataclass(frozen=True)
class RateQuote:
    """Rate returned by the exchange-rate collaborator.

    Attributes:
        rate: Units of the target currency per one unit of the source.
        published_date: Opaque trade date label, not necessarily today.
    """

    rate: Decimal
    published_date: str


__all__ = ["ConversionStatus", "ConversionState", "RateQuote"]
