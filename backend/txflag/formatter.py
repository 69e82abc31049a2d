"""
formatter.py – Produce the final response.

JSON contract
-------------
{
  "very_large_transactions":          [transaction_id, ...],
  "large_first_contact_transactions": [transaction_id, ...],
  "pattern_anomaly_transactions":     [transaction_id, ...],
  "errors":      {pass_name: message},   // only passes that failed
  "summary":     {total_users, total_transactions, *_flagged,
                  processing_time_seconds},
  "parse_stats": {...}                   // loader diagnostics (optional)
}

ID lists are sorted so the same input always serialises the same way.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .models import AnalysisResult, Dataset
from .pipeline import LARGE_FIRST_CONTACT, PATTERN_ANOMALY, VERY_LARGE, PassOutcome

log = logging.getLogger(__name__)


def format_output(
    outcomes: Dict[str, PassOutcome],
    dataset: Dataset,
    elapsed: float,
    parse_stats: Optional[dict] = None,
) -> Dict[str, Any]:
    very_large = sorted(outcomes[VERY_LARGE].transaction_ids)
    first_contact = sorted(outcomes[LARGE_FIRST_CONTACT].transaction_ids)
    anomalies = sorted(outcomes[PATTERN_ANOMALY].transaction_ids)

    result = AnalysisResult(
        very_large_transactions=very_large,
        large_first_contact_transactions=first_contact,
        pattern_anomaly_transactions=anomalies,
        errors={name: o.error for name, o in outcomes.items() if not o.ok},
        summary={
            "total_users": len(dataset.users),
            "total_transactions": len(dataset.transactions),
            "very_large_flagged": len(very_large),
            "large_first_contact_flagged": len(first_contact),
            "pattern_anomaly_flagged": len(anomalies),
            "processing_time_seconds": round(elapsed, 4),
        },
        parse_stats=parse_stats,
    )
    return result.model_dump(exclude_none=True)
