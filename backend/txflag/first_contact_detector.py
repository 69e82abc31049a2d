"""
first_contact_detector.py – Flag large transactions between strangers.

A transaction is flagged when it is at least the threshold AND it is the
first transaction, in time order, between its two users in either direction.

History is an undirected networkx graph built fresh on every call: an edge
u–v means "u and v have transacted". Every transaction adds its edge after
being checked, whatever its amount, so a small first payment still
establishes the relationship and a later large one is not flagged.
"""
from __future__ import annotations

import logging
from typing import Set

import networkx as nx

from .chronology import in_time_order
from .config import LARGE_FIRST_CONTACT_MIN_VALUE
from .models import Dataset

log = logging.getLogger(__name__)


def detect_large_first_contacts(
    dataset: Dataset,
    threshold: float = LARGE_FIRST_CONTACT_MIN_VALUE,
) -> Set[str]:
    """
    Return IDs of first-contact transactions of at least ``threshold``.

    Ties on timestamp are broken by input order. Self-transactions are not
    filtered here; the loader drops them.
    """
    flagged: Set[str] = set()
    history = nx.Graph()

    for tx in in_time_order(dataset):
        payer, payee = tx.payer.user_id, tx.payee.user_id

        if tx.amount >= threshold and not history.has_edge(payer, payee):
            flagged.add(tx.transaction_id)

        history.add_edge(payer, payee)

    log.info(
        "Large first contacts (>= %.2f): %d flagged across %d known pairs",
        threshold,
        len(flagged),
        history.number_of_edges(),
    )
    return flagged
