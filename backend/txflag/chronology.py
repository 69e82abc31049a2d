"""
chronology.py – Tabular and time-ordered views over a Dataset.

The input transactions are not assumed to be in chronological order, so the
stateful passes re-sort. All sorts here are stable: transactions sharing a
timestamp keep their input order, which decides which one counts as "first".

A Dataset never mixes naive and offset-aware timestamps, so every
transaction follows the first one's convention.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

import pandas as pd

from .models import Dataset, Transaction

log = logging.getLogger(__name__)

FRAME_COLUMNS = [
    "transaction_id",
    "payer_id",
    "payee_id",
    "payer_country",
    "payee_country",
    "amount",
    "timestamp",
    "category",
]


def _as_utc(ts: datetime) -> datetime:
    return ts if ts.tzinfo is None else ts.astimezone(timezone.utc)


def transaction_frame(dataset: Dataset) -> pd.DataFrame:
    """
    Flatten the dataset's transactions into a DataFrame, one row per
    transaction, index = position in the input.

    Country columns hold the party geotag at transaction time and are null
    when the geotag is missing.
    """
    records = [
        {
            "transaction_id": t.transaction_id,
            "payer_id":       t.payer.user_id,
            "payee_id":       t.payee.user_id,
            "payer_country":  t.payer.geotag.country_code if t.payer.geotag else None,
            "payee_country":  t.payee.geotag.country_code if t.payee.geotag else None,
            "amount":         float(t.amount),
            "timestamp":      _as_utc(t.timestamp),
            "category":       t.category,
        }
        for t in dataset.transactions
    ]
    df = pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)
    if not df.empty:
        # Offsets may differ between rows; normalise aware stamps to UTC.
        aware = dataset.transactions[0].timestamp.tzinfo is not None
        df["timestamp"] = pd.to_datetime(df["timestamp"], utc=aware)
    return df


def chronological(df: pd.DataFrame) -> pd.DataFrame:
    """Return ``df`` sorted by timestamp ascending, ties in input order."""
    return df.sort_values("timestamp", kind="stable")


def in_time_order(dataset: Dataset) -> List[Transaction]:
    """Transactions as objects, oldest first (``sorted`` is stable)."""
    return sorted(dataset.transactions, key=lambda t: t.timestamp)
