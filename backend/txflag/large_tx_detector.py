"""
large_tx_detector.py – Flag individually very large transactions.

Stateless: each transaction is judged on its own amount, so neither input
order nor timestamps matter. The bound is inclusive.
"""
from __future__ import annotations

import logging
from typing import Set

from .config import VERY_LARGE_TX_MIN_VALUE
from .models import Dataset

log = logging.getLogger(__name__)


def detect_very_large_transactions(
    dataset: Dataset,
    threshold: float = VERY_LARGE_TX_MIN_VALUE,
) -> Set[str]:
    """Return IDs of transactions whose amount is at least ``threshold``."""
    flagged = {t.transaction_id for t in dataset.transactions if t.amount >= threshold}
    log.info("Very large transactions (>= %.2f): %d flagged", threshold, len(flagged))
    return flagged
