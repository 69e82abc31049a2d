"""
pipeline.py – Run every detection pass against one dataset.

The passes share no state and none reads another's output. Each one runs in
isolation: any error it raises is recorded on its outcome and the remaining
passes still run. TxFlagError is an expected data problem and is logged as a
warning; anything else is logged with its traceback.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Optional

from .config import (
    LARGE_FIRST_CONTACT_MIN_VALUE,
    RAPID_REPEAT_WINDOW_MINUTES,
    VERY_LARGE_TX_MIN_VALUE,
)
from .errors import TxFlagError
from .first_contact_detector import detect_large_first_contacts
from .large_tx_detector import detect_very_large_transactions
from .models import Dataset
from .pattern_detector import detect_pattern_anomalies

log = logging.getLogger(__name__)

VERY_LARGE = "very_large"
LARGE_FIRST_CONTACT = "large_first_contact"
PATTERN_ANOMALY = "pattern_anomaly"


@dataclass(frozen=True)
class PassOutcome:
    name: str
    transaction_ids: FrozenSet[str] = field(default_factory=frozenset)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _run_pass(name: str, detector: Callable[[], set]) -> PassOutcome:
    try:
        ids = detector()
    except TxFlagError as exc:
        log.warning("Pass %s failed: %s", name, exc)
        return PassOutcome(name=name, error=str(exc))
    except Exception as exc:
        log.exception("Pass %s crashed", name)
        return PassOutcome(name=name, error=f"{type(exc).__name__}: {exc}")
    return PassOutcome(name=name, transaction_ids=frozenset(ids))


def run_all(
    dataset: Dataset,
    very_large_threshold: float = VERY_LARGE_TX_MIN_VALUE,
    first_contact_threshold: float = LARGE_FIRST_CONTACT_MIN_VALUE,
    window_minutes: float = RAPID_REPEAT_WINDOW_MINUTES,
) -> Dict[str, PassOutcome]:
    """Run all three passes and return their outcomes keyed by pass name."""
    return {
        VERY_LARGE: _run_pass(
            VERY_LARGE,
            lambda: detect_very_large_transactions(dataset, very_large_threshold),
        ),
        LARGE_FIRST_CONTACT: _run_pass(
            LARGE_FIRST_CONTACT,
            lambda: detect_large_first_contacts(dataset, first_contact_threshold),
        ),
        PATTERN_ANOMALY: _run_pass(
            PATTERN_ANOMALY,
            lambda: detect_pattern_anomalies(dataset, window_minutes),
        ),
    }
