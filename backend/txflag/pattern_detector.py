"""
pattern_detector.py – Flag payer→payee relationships showing anomalous patterns.

Transactions are grouped by the ORDERED pair (payer_id, payee_id): A→B and
B→A are separate groups. A group with a single transaction has nothing to
compare against and is skipped. Each remaining group, in time order, is
checked for two patterns:

  Cross-border mismatch
    The group's transactions were made from more than one distinct
    (payer country, payee country) combination. Countries come from the
    party geotags at transaction time, not the users' homes. An established
    relationship that suddenly appears from a different country pairing
    suggests account takeover or location spoofing.

  Rapid repeat
    Two consecutive transactions carry the same amount and are no more than
    ``window_minutes`` apart (true elapsed time, inclusive). Identical
    amounts in quick succession look like scripted duplicates or limit
    probing. Only evaluated when the group is not already flagged.

Once a group is flagged every transaction in it is reported, not only the
offending pair.
"""
from __future__ import annotations

import logging
from typing import Set

import pandas as pd

from .chronology import chronological, transaction_frame
from .config import RAPID_REPEAT_WINDOW_MINUTES
from .errors import MissingFieldError
from .models import Dataset

log = logging.getLogger(__name__)

_PAIR_KEY = ["payer_id", "payee_id"]
_COUNTRY_COLS = ["payer_country", "payee_country"]


def _require_geotags(group: pd.DataFrame) -> None:
    for row in group[["transaction_id", *_COUNTRY_COLS]].itertuples(index=False):
        if pd.isna(row.payer_country):
            raise MissingFieldError(row.transaction_id, "payer.geotag")
        if pd.isna(row.payee_country):
            raise MissingFieldError(row.transaction_id, "payee.geotag")


def has_cross_border_mismatch(group: pd.DataFrame) -> bool:
    """
    True if the group spans more than one (payer country, payee country) pair.

    Raises MissingFieldError if any transaction lacks a party geotag.
    """
    _require_geotags(group)
    return len(group[_COUNTRY_COLS].drop_duplicates()) > 1


def has_rapid_repeat(
    group: pd.DataFrame,
    window_minutes: float = RAPID_REPEAT_WINDOW_MINUTES,
) -> bool:
    """
    True if two consecutive transactions of a chronologically sorted group
    share an amount and lie within ``window_minutes`` of each other.
    """
    same_amount = group["amount"].eq(group["amount"].shift())
    gap = group["timestamp"].diff()
    close = gap <= pd.Timedelta(minutes=window_minutes)
    return bool((same_amount & close).any())


def detect_pattern_anomalies(
    dataset: Dataset,
    window_minutes: float = RAPID_REPEAT_WINDOW_MINUTES,
) -> Set[str]:
    """Return IDs of all transactions in payer→payee groups showing either pattern."""
    flagged: Set[str] = set()

    df = transaction_frame(dataset)
    if df.empty:
        return flagged

    # groupby keeps row order inside each group, so groups stay chronological
    df_sorted = chronological(df)
    cross_border = rapid_repeat = 0

    for (payer, payee), group in df_sorted.groupby(_PAIR_KEY, sort=False):
        if len(group) < 2:
            continue

        if has_cross_border_mismatch(group):
            cross_border += 1
        elif has_rapid_repeat(group, window_minutes):
            rapid_repeat += 1
        else:
            continue

        log.debug("Pattern anomaly %s → %s: %d transactions", payer, payee, len(group))
        flagged.update(group["transaction_id"])

    log.info(
        "Pattern anomalies: %d transactions flagged (%d cross-border groups, %d rapid-repeat groups)",
        len(flagged),
        cross_border,
        rapid_repeat,
    )
    return flagged
