"""txflag – heuristic screening of historical transactions for possible fraud."""

__version__ = "1.0.0"
