"""
Audit Logger

DESIGN DECISION: Every user action and every celebration is logged.
This provides:
1. Traceability of how the ledger got where it is
2. Debugging capability
3. An activity history the user can look at

The audit logger:
- Gracefully handles failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace related events
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from fundtracker.models.audit import AuditEvent, AuditEventBuilder
from fundtracker.services.storage.interface import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage, when one is configured (for the activity panel)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_contribution_added(
        self,
        amount: str,
        total: str,
        percent_funded: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.contribution_added(
            amount=amount,
            total=total,
            percent_funded=percent_funded,
            correlation_id=correlation_id,
        ))

    def log_contribution_rejected(
        self,
        raw_input: str,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.contribution_rejected(
            raw_input=raw_input,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_contribution_undone(
        self,
        amount: str,
        total: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.contribution_undone(
            amount=amount,
            total=total,
            correlation_id=correlation_id,
        ))

    def log_undo_rejected(self, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.undo_rejected(correlation_id=correlation_id))

    def log_ledger_reset(self, cleared_count: int, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.ledger_reset(
            cleared_count=cleared_count,
            correlation_id=correlation_id,
        ))

    def log_reset_cancelled(self, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.reset_cancelled(correlation_id=correlation_id))

    def log_milestone_reached(
        self,
        milestone: int,
        percent_funded: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.milestone_reached(
            milestone=milestone,
            percent_funded=percent_funded,
            correlation_id=correlation_id,
        ))

    def log_confetti_started(self, particle_count: int, duration_ms: int) -> None:
        self.log(AuditEventBuilder.confetti_started(
            particle_count=particle_count,
            duration_ms=duration_ms,
        ))

    def log_confetti_finished(self, particle_count: int, elapsed_ms: float) -> None:
        self.log(AuditEventBuilder.confetti_finished(
            particle_count=particle_count,
            elapsed_ms=elapsed_ms,
        ))

    def log_confetti_trigger_ignored(self) -> None:
        self.log(AuditEventBuilder.confetti_trigger_ignored())

    def log_persisted_state_recovered(self, reason: str, kept_count: int) -> None:
        self.log(AuditEventBuilder.persisted_state_recovered(
            reason=reason,
            kept_count=kept_count,
        ))

    def log_save_failed(
        self,
        error_message: str,
        contribution_count: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.save_failed(
            error_message=error_message,
            contribution_count=contribution_count,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (add, undo, reset)
    and pass it through all subsequent operations.
    """
    return uuid4()
