"""
models.py – Pydantic models.

Domain types (Geotag, User, Party, Transaction, Dataset) are frozen: the
passes only ever read them. JSON uses camelCase keys (``transactionId``,
``countryCode``); the snake_case attribute names are accepted as well.

The response models at the bottom define the JSON contract of /analyze.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Geotag(_Frozen):
    country_code: str
    lat: float
    lon: float


class User(_Frozen):
    user_id: str
    name: str
    home: Geotag


class Party(_Frozen):
    """
    One side of a transaction. ``geotag`` is where the party was at the time
    of the transaction, which need not be the user's home.
    """
    user_id: str
    geotag: Optional[Geotag] = None


class Transaction(_Frozen):
    transaction_id: str
    payer: Party
    payee: Party
    timestamp: datetime
    amount: float = Field(..., ge=0.0, allow_inf_nan=False)
    category: str = ""


def has_mixed_timezones(transactions) -> bool:
    """True if some timestamps carry a UTC offset and others do not."""
    return len({t.timestamp.tzinfo is None for t in transactions}) > 1


class Dataset(_Frozen):
    users: Tuple[User, ...] = ()
    transactions: Tuple[Transaction, ...] = ()

    @model_validator(mode="after")
    def _comparable_timestamps(self) -> "Dataset":
        # naive and offset-aware datetimes cannot be ordered against each other
        if has_mixed_timezones(self.transactions):
            raise ValueError("timestamps must either all carry a UTC offset or all omit it")
        return self


# ── Response contract ──────────────────────────────────────────────────────────

class ParseStats(BaseModel):
    total_transactions: int
    valid_transactions: int
    dropped_transactions: int
    invalid_records: int
    duplicate_tx_ids: int
    self_transactions: int
    negative_amounts: int
    warnings: List[str] = []


class AnalysisSummary(BaseModel):
    total_users: int
    total_transactions: int
    very_large_flagged: int
    large_first_contact_flagged: int
    pattern_anomaly_flagged: int
    processing_time_seconds: float


class AnalysisResult(BaseModel):
    """
    Each ID list has set semantics (no duplicates); the lists are sorted only
    so that identical inputs serialise identically.
    """
    very_large_transactions: List[str]
    large_first_contact_transactions: List[str]
    pattern_anomaly_transactions: List[str]
    errors: Dict[str, str] = {}
    summary: AnalysisSummary
    parse_stats: Optional[ParseStats] = None
