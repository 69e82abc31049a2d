"""
errors.py – Exceptions raised by the detection passes.

The passes assume a well-formed dataset. When a record turns out to be
incomplete they fail fast instead of skipping it, so that a partial result
is never mistaken for a clean one.
"""
from __future__ import annotations


class TxFlagError(Exception):
    """Base class for errors raised inside a detection pass."""


class MissingFieldError(TxFlagError, ValueError):
    """A transaction lacks a field a pass needs (e.g. a party geotag)."""

    def __init__(self, transaction_id: str, field: str):
        self.transaction_id = transaction_id
        self.field = field
        super().__init__(f"Transaction {transaction_id!r} is missing required field {field!r}")
