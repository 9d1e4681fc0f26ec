"""Contribution ledger and milestone detection."""

from fundtracker.ledger.ledger import (
    EmptyLedgerError,
    InvalidAmountError,
    Ledger,
    LedgerError,
    to_cents,
)
from fundtracker.ledger.milestones import crossed, milestone_progress

__all__ = [
    "EmptyLedgerError",
    "InvalidAmountError",
    "Ledger",
    "LedgerError",
    "crossed",
    "milestone_progress",
    "to_cents",
]
