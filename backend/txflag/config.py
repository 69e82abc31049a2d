"""
config.py – Centralised configuration via environment variables.
Every pass still takes its threshold as an explicit parameter; the values
here are only the defaults.
"""
import os


# ── File limits ────────────────────────────────────────────────────────────────
MAX_FILE_SIZE_MB: int = int(os.getenv("MAX_FILE_SIZE_MB", "20"))
MAX_FILE_SIZE_BYTES: int = MAX_FILE_SIZE_MB * 1024 * 1024
MAX_TRANSACTIONS: int = int(os.getenv("MAX_TRANSACTIONS", "100000"))

# ── Very large transactions ────────────────────────────────────────────────────
# Inclusive: an amount exactly at the threshold is flagged.
VERY_LARGE_TX_MIN_VALUE: float = float(os.getenv("VERY_LARGE_TX_MIN_VALUE", "10000.0"))

# ── Large first-contact transactions ───────────────────────────────────────────
LARGE_FIRST_CONTACT_MIN_VALUE: float = float(
    os.getenv("LARGE_FIRST_CONTACT_MIN_VALUE", "1000.0")
)

# ── Pattern anomalies ──────────────────────────────────────────────────────────
# Two identical amounts between the same payer/payee no more than this many
# minutes apart (true elapsed time) count as a rapid repeat.
RAPID_REPEAT_WINDOW_MINUTES: float = float(os.getenv("RAPID_REPEAT_WINDOW_MINUTES", "10.0"))

# ── HTTP ───────────────────────────────────────────────────────────────────────
CORS_ORIGINS: list = os.getenv("CORS_ORIGINS", "*").split(",")
