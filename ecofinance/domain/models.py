"""Domain models - dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RawRow(BaseModel):
    """One CSV/aggregator row before scoring. Every field is non-empty text."""

    model_config = ConfigDict(frozen=True)

    date: str = Field(..., min_length=1)
    merchant: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    amount: str = Field(..., min_length=1)


@dataclass(frozen=True)
class ScoredTransaction:
    """Transaction with its eco-score, ready for persistence"""

    date: date
    merchant: str
    category: str  # as given, not lower-cased
    amount: Decimal
    eco_score: int
    has_alternatives: bool
    owner_id: int


@dataclass(frozen=True)
class SustainabilitySummary:
    """Batch-level sustainability snapshot"""

    owner_id: int
    overall_score: int
    carbon_footprint: Decimal
    sustainable_purchases: int  # percent
    water_usage: Decimal
    date: datetime


@dataclass(frozen=True)
class CategoryBreakdown:
    """Spend and average eco-score for one lower-cased category"""

    owner_id: int
    category: str
    amount: Decimal
    eco_score: int


@dataclass(frozen=True)
class ProcessedBatch:
    """Output of one scoring run"""

    transactions: List[ScoredTransaction]
    summary: SustainabilitySummary
    breakdowns: List[CategoryBreakdown]
