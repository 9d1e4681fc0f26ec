"""
Audit Models for Fund Tracker

Every user action and every celebration is logged for audit purposes.
This provides:
1. Traceability of how the ledger reached its current state
2. Debugging information when persistence misbehaves
3. The activity history shown in the UI

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Ledger mutations
    CONTRIBUTION_ADDED = "contribution_added"
    CONTRIBUTION_REJECTED = "contribution_rejected"
    CONTRIBUTION_UNDONE = "contribution_undone"
    UNDO_REJECTED = "undo_rejected"
    LEDGER_RESET = "ledger_reset"
    RESET_CANCELLED = "reset_cancelled"

    # Celebrations
    MILESTONE_REACHED = "milestone_reached"
    CONFETTI_STARTED = "confetti_started"
    CONFETTI_FINISHED = "confetti_finished"
    CONFETTI_TRIGGER_IGNORED = "confetti_trigger_ignored"

    # Persistence
    PERSISTED_STATE_RECOVERED = "persisted_state_recovered"
    SAVE_FAILED = "save_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - all events caused by one user action share an ID
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.contribution_added("50.00", "55.00", 55, correlation_id)
        event = AuditEventBuilder.ledger_reset(3, correlation_id)
    """

    @staticmethod
    def contribution_added(
        amount: str,
        total: str,
        percent_funded: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONTRIBUTION_ADDED,
            correlation_id=correlation_id,
            description=f"Contribution added: {amount}",
            details={
                "amount": amount,
                "total": total,
                "percent_funded": percent_funded,
            },
            is_user_action=True,
        )

    @staticmethod
    def contribution_rejected(
        raw_input: str,
        reason: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONTRIBUTION_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Contribution rejected: {reason}",
            details={
                "raw_input": raw_input,
                "reason": reason,
            },
            is_user_action=True,
        )

    @staticmethod
    def contribution_undone(
        amount: str,
        total: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONTRIBUTION_UNDONE,
            correlation_id=correlation_id,
            description=f"Contribution removed: {amount}",
            details={
                "amount": amount,
                "total": total,
            },
            is_user_action=True,
        )

    @staticmethod
    def undo_rejected(correlation_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UNDO_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="Undo requested on an empty ledger",
            is_user_action=True,
        )

    @staticmethod
    def ledger_reset(
        cleared_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_RESET,
            correlation_id=correlation_id,
            description=f"Ledger reset, {cleared_count} contributions cleared",
            details={"cleared_count": cleared_count},
            is_user_action=True,
        )

    @staticmethod
    def reset_cancelled(correlation_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RESET_CANCELLED,
            correlation_id=correlation_id,
            description="Reset declined at confirmation",
            is_user_action=True,
        )

    @staticmethod
    def milestone_reached(
        milestone: int,
        percent_funded: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MILESTONE_REACHED,
            correlation_id=correlation_id,
            description=f"Milestone reached: {milestone}%",
            details={
                "milestone": milestone,
                "percent_funded": percent_funded,
            },
        )

    @staticmethod
    def confetti_started(
        particle_count: int,
        duration_ms: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONFETTI_STARTED,
            correlation_id=correlation_id,
            description=f"Confetti started with {particle_count} particles",
            details={
                "particle_count": particle_count,
                "duration_ms": duration_ms,
            },
        )

    @staticmethod
    def confetti_finished(
        particle_count: int,
        elapsed_ms: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONFETTI_FINISHED,
            description=f"Confetti finished after {elapsed_ms:.0f} ms",
            details={
                "particle_count": particle_count,
                "elapsed_ms": elapsed_ms,
            },
        )

    @staticmethod
    def confetti_trigger_ignored(
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONFETTI_TRIGGER_IGNORED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description="Confetti already running, trigger ignored",
        )

    @staticmethod
    def persisted_state_recovered(
        reason: str,
        kept_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSISTED_STATE_RECOVERED,
            severity=AuditSeverity.WARNING,
            description=f"Persisted contributions recovered: {reason}",
            details={
                "reason": reason,
                "kept_count": kept_count,
            },
        )

    @staticmethod
    def save_failed(
        error_message: str,
        contribution_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description="Failed to persist contributions",
            details={"contribution_count": contribution_count},
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
