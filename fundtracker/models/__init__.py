"""
Data Models Package

This package contains the Pydantic models used across Fund Tracker.
Everything that leaves the core (snapshots, outcomes, audit events,
particles) conforms to these schemas.
"""

from fundtracker.models.ledger import (
    ContributionOutcome,
    LedgerSnapshot,
    MilestoneProgress,
)
from fundtracker.models.particle import Particle, SimulatorState
from fundtracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "ContributionOutcome",
    "LedgerSnapshot",
    "MilestoneProgress",
    # Confetti models
    "Particle",
    "SimulatorState",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
