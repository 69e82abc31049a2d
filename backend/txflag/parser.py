"""
parser.py – JSON loading and validation.

Expected document
-----------------
{
  "users":        [{userId, name, home: {countryCode, lat, lon}}, ...],
  "transactions": [{transactionId, payer: {userId, geotag}, payee: {userId, geotag},
                    timestamp, amount, category}, ...]
}

Validates:
  • Top level is an object with a ``transactions`` array (``users`` optional)
  • Each record against the pydantic models (bad records are dropped)
  • amount >= 0 and finite
  • Timestamps either all carry a UTC offset or all omit it
  • No self-transactions (payer == payee)
  • Duplicate transactionId detection (first occurrence wins)
  • Encoding auto-detection (UTF-8 / latin-1 fallback)

The detection passes trust what this module hands them.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Tuple, Union

from pydantic import ValidationError

from .config import MAX_TRANSACTIONS
from .models import Dataset, Transaction, User, has_mixed_timezones

log = logging.getLogger(__name__)


def _decode_bytes(raw: bytes) -> str:
    """Try UTF-8, then latin-1 fallback."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1", errors="replace")


def _is_negative_amount(exc: ValidationError) -> bool:
    amount_errors = {err["type"] for err in exc.errors() if tuple(err["loc"]) == ("amount",)}
    # NaN / inf are malformed, not negative
    return amount_errors == {"greater_than_equal"}


def _parse_users(raw_users: list, stats: dict) -> List[User]:
    users: List[User] = []
    for i, rec in enumerate(raw_users):
        try:
            users.append(User.model_validate(rec))
        except ValidationError as exc:
            stats["invalid_records"] += 1
            log.debug("Dropping user record %d: %s", i, exc)
    return users


def parse_json(file_bytes: bytes) -> Tuple[Dataset, dict]:
    """
    Parse and validate JSON bytes.

    Returns
    -------
    dataset : Dataset – immutable, ready for analysis
    stats   : dict    – parse statistics and warnings

    Raises
    ------
    ValueError on fatal errors (malformed JSON, wrong shape, zero valid
    transactions).
    """
    stats: dict = {
        "total_transactions": 0,
        "valid_transactions": 0,
        "dropped_transactions": 0,
        "invalid_records": 0,
        "duplicate_tx_ids": 0,
        "self_transactions": 0,
        "negative_amounts": 0,
        "warnings": [],
    }

    # 1. Decode & read ─────────────────────────────────────────────────────────
    text = _decode_bytes(file_bytes)
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"JSON parse error: {exc}") from exc

    if not isinstance(doc, dict):
        raise ValueError("Top-level JSON value must be an object with a 'transactions' array.")

    raw_users = doc.get("users") or []
    raw_txs = doc.get("transactions")
    if not isinstance(raw_txs, list) or not isinstance(raw_users, list):
        raise ValueError("'users' and 'transactions' must both be arrays.")

    stats["total_transactions"] = len(raw_txs)
    log.info("JSON loaded: %d users, %d raw transactions", len(raw_users), len(raw_txs))

    if not raw_txs:
        raise ValueError("JSON file has no transactions.")

    # 2. Users ─────────────────────────────────────────────────────────────────
    users = _parse_users(raw_users, stats)

    # 3. Transactions ──────────────────────────────────────────────────────────
    transactions: List[Transaction] = []
    seen_ids: set = set()
    invalid_tx = 0

    for i, rec in enumerate(raw_txs):
        try:
            tx = Transaction.model_validate(rec)
        except ValidationError as exc:
            if _is_negative_amount(exc):
                stats["negative_amounts"] += 1
            else:
                invalid_tx += 1
                log.debug("Dropping transaction record %d: %s", i, exc)
            continue

        if tx.payer.user_id == tx.payee.user_id:
            stats["self_transactions"] += 1
            continue

        if tx.transaction_id in seen_ids:
            stats["duplicate_tx_ids"] += 1
            continue

        seen_ids.add(tx.transaction_id)
        transactions.append(tx)

    stats["invalid_records"] += invalid_tx

    if stats["invalid_records"]:
        stats["warnings"].append(f"Dropped {stats['invalid_records']} malformed records.")
    if stats["negative_amounts"]:
        stats["warnings"].append(
            f"Dropped {stats['negative_amounts']} transactions with negative amount."
        )
    if stats["self_transactions"]:
        stats["warnings"].append(
            f"Dropped {stats['self_transactions']} self-transactions."
        )
    if stats["duplicate_tx_ids"]:
        stats["warnings"].append(
            f"Dropped {stats['duplicate_tx_ids']} duplicate transactionId records."
        )

    # 4. Transaction limit ─────────────────────────────────────────────────────
    if len(transactions) > MAX_TRANSACTIONS:
        stats["warnings"].append(
            f"Dataset truncated from {len(transactions)} to {MAX_TRANSACTIONS} transactions."
        )
        transactions = transactions[:MAX_TRANSACTIONS]

    if not transactions:
        raise ValueError(
            "No valid transactions remain after validation. "
            f"Issues: {'; '.join(stats['warnings']) or 'unknown'}"
        )

    # 5. Timestamp convention ──────────────────────────────────────────────────
    # Offsets may differ freely; naive and offset-aware may not be mixed.
    if has_mixed_timezones(transactions):
        raise ValueError(
            "Timestamps mix values with and without a UTC offset; "
            "use one convention for the whole file."
        )

    stats["valid_transactions"] = len(transactions)
    stats["dropped_transactions"] = stats["total_transactions"] - len(transactions)
    if stats["warnings"]:
        log.warning("Parse warnings: %s", stats["warnings"])
    log.info(
        "Parse complete: %d valid / %d total transactions",
        stats["valid_transactions"],
        stats["total_transactions"],
    )
    return Dataset(users=tuple(users), transactions=tuple(transactions)), stats


def load_dataset(path: Union[str, Path]) -> Tuple[Dataset, dict]:
    """Read a JSON file from disk and parse it with :func:`parse_json`."""
    return parse_json(Path(path).read_bytes())
