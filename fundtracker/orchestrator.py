"""
Main Orchestrator for Fund Tracker

This module ties together all the components and defines the
end-to-end flows for:
1. Add (raw input -> ledger -> persist -> milestones -> celebrate / acknowledge)
2. Undo (pop last -> persist -> notify)
3. Reset (confirm -> clear -> persist -> notify)

DESIGN DECISION: The session enforces the boundaries:
- Invalid input never mutates the ledger
- Every mutation is persisted in the same synchronous step
- A failed write never rolls back the in-memory ledger
- Only add() looks at milestones; undo and reset never celebrate

There is no module-level state. Each application instance builds one
ContributionSession and talks to it through the methods below.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

import structlog

from fundtracker.audit import AuditLogger, create_correlation_id
from fundtracker.config import TrackerSettings, get_settings
from fundtracker.confetti import LoopFrameDriver, ParticleSimulator, PillowSurface
from fundtracker.formatting import format_amount
from fundtracker.ledger import (
    EmptyLedgerError,
    InvalidAmountError,
    Ledger,
    crossed,
    milestone_progress,
)
from fundtracker.models.ledger import (
    ContributionOutcome,
    LedgerSnapshot,
    MilestoneProgress,
)
from fundtracker.services.notifications import (
    ConfirmationInterface,
    CooperativeIntervalScheduler,
    IntervalSchedulerInterface,
    NotifierInterface,
    StaggeredAnnouncer,
)
from fundtracker.services.storage import (
    ContributionStoreInterface,
    InMemoryAuditStorage,
    InMemoryContributionStore,
    JsonFileContributionStore,
    StorageError,
)


EMPTY_INPUT_MESSAGE = "Enter an amount to add."
MILESTONE_MESSAGE = "Congrats, reached {milestone}%!"
ADDED_MESSAGE = "{amount} added"
REMOVED_MESSAGE = "Removed {amount}"
RESET_PROMPT = "Reset all contributions? This cannot be undone."
RESET_DONE_MESSAGE = "All cleared"
SAVE_FAILED_MESSAGE = "Could not save your contributions."


class ContributionSession:
    """
    Session controller for one tracker instance.

    Owns the ledger. Everything else (storage, notifications,
    confirmation, timers, confetti) is an injected collaborator.
    """

    def __init__(
        self,
        store: ContributionStoreInterface,
        notifier: NotifierInterface,
        confirmer: ConfirmationInterface,
        scheduler: IntervalSchedulerInterface,
        simulator: Optional[ParticleSimulator] = None,
        settings: Optional[TrackerSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._settings = settings or get_settings().tracker
        self._milestones = tuple(self._settings.milestones)
        self._store = store
        self._notifier = notifier
        self._confirmer = confirmer
        self._simulator = simulator
        self._audit_logger = audit_logger or AuditLogger()
        self._announcer = StaggeredAnnouncer(
            notifier=notifier,
            scheduler=scheduler,
            interval_ms=self._settings.milestone_interval_ms,
            duration_ms=self._settings.toast_duration_ms,
        )

        self._ledger = Ledger(self._settings.target, store.load())

        recovery = getattr(store, "last_recovery", None)
        if recovery:
            self._audit_logger.log_persisted_state_recovered(
                reason=recovery,
                kept_count=len(self._ledger),
            )

    # ------------------------------------------------------------------
    # Read-only query surface
    # ------------------------------------------------------------------

    @property
    def target(self) -> Decimal:
        return self._ledger.target

    @property
    def milestone_thresholds(self) -> tuple[int, ...]:
        return self._milestones

    @property
    def simulator(self) -> Optional[ParticleSimulator]:
        return self._simulator

    @property
    def announcing(self) -> bool:
        """True while staggered milestone messages are still queued."""
        return self._announcer.active

    def snapshot(self) -> LedgerSnapshot:
        return self._ledger.snapshot()

    def milestones(self) -> list[MilestoneProgress]:
        return milestone_progress(
            self._ledger.target,
            self._milestones,
            self._ledger.percent_funded(),
        )

    def format(self, amount: Any) -> str:
        return format_amount(amount, self._settings.currency_symbol)

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def add_contribution(self, raw_input: Any) -> Optional[ContributionOutcome]:
        """
        Add a user-entered amount.

        Strings are stripped; numeric validation is left to the ledger.

        Returns:
            The outcome, or None if the input was rejected
        """
        correlation_id = create_correlation_id()

        value = raw_input.strip() if isinstance(raw_input, str) else raw_input
        if value is None or value == "":
            self._notify(EMPTY_INPUT_MESSAGE)
            self._audit_logger.log_contribution_rejected(
                raw_input="",
                reason="empty input",
                correlation_id=correlation_id,
            )
            return None

        previous_percent = self._ledger.percent_funded()
        try:
            total, percent = self._ledger.add(value)
        except InvalidAmountError as e:
            self._notify(str(e))
            self._audit_logger.log_contribution_rejected(
                raw_input=str(raw_input),
                reason=str(e),
                correlation_id=correlation_id,
            )
            return None

        amount = self._ledger.contributions[-1]
        saved = self._persist(correlation_id)

        self._audit_logger.log_contribution_added(
            amount=str(amount),
            total=str(total),
            percent_funded=percent,
            correlation_id=correlation_id,
        )

        reached = crossed(previous_percent, percent, self._milestones)
        if reached:
            for m in reached:
                self._audit_logger.log_milestone_reached(
                    milestone=m,
                    percent_funded=percent,
                    correlation_id=correlation_id,
                )
            self._announcer.announce(
                [MILESTONE_MESSAGE.format(milestone=m) for m in reached]
            )
            if self._simulator is not None:
                self._simulator.start()
        else:
            self._notify(ADDED_MESSAGE.format(amount=self.format(amount)))

        if not saved:
            self._report_save_failure()

        return ContributionOutcome(
            amount=amount,
            total=total,
            previous_percent=previous_percent,
            percent_funded=percent,
            crossed_milestones=tuple(reached),
        )

    def undo(self) -> Optional[Decimal]:
        """
        Remove the most recent contribution.

        Returns:
            The removed amount, or None if there was nothing to undo
        """
        correlation_id = create_correlation_id()

        try:
            amount = self._ledger.undo_last()
        except EmptyLedgerError as e:
            self._notify(str(e))
            self._audit_logger.log_undo_rejected(correlation_id=correlation_id)
            return None

        saved = self._persist(correlation_id)
        self._audit_logger.log_contribution_undone(
            amount=str(amount),
            total=str(self._ledger.total()),
            correlation_id=correlation_id,
        )
        self._notify(REMOVED_MESSAGE.format(amount=self.format(amount)))

        if not saved:
            self._report_save_failure()
        return amount

    def reset(self) -> bool:
        """
        Clear every contribution after explicit confirmation.

        Returns:
            True if the ledger was cleared
        """
        correlation_id = create_correlation_id()

        if not self._confirmer.confirm(RESET_PROMPT):
            self._audit_logger.log_reset_cancelled(correlation_id=correlation_id)
            return False

        cleared = self._ledger.reset()
        saved = self._persist(correlation_id)
        self._audit_logger.log_ledger_reset(
            cleared_count=cleared,
            correlation_id=correlation_id,
        )
        self._notify(RESET_DONE_MESSAGE)

        if not saved:
            self._report_save_failure()
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _notify(self, message: str) -> None:
        self._notifier.notify(message, self._settings.toast_duration_ms)

    def _persist(self, correlation_id: UUID) -> bool:
        """Best-effort write of the whole ledger."""
        try:
            self._store.save(self._ledger.contributions)
            return True
        except StorageError as e:
            self._audit_logger.log_save_failed(
                error_message=str(e),
                contribution_count=len(self._ledger),
                correlation_id=correlation_id,
            )
            return False

    def _report_save_failure(self) -> None:
        if self._settings.notify_on_save_failure:
            self._notify(SAVE_FAILED_MESSAGE)


@dataclass
class AppComponents:
    """Everything a host needs to drive one session."""
    session: ContributionSession
    scheduler: CooperativeIntervalScheduler
    frame_driver: LoopFrameDriver
    surface: PillowSurface
    audit_storage: InMemoryAuditStorage


def create_app_components(
    notifier: NotifierInterface,
    confirmer: ConfirmationInterface,
    use_storage: bool = True,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        notifier: Host notifier
        confirmer: Host confirmation prompt
        use_storage: Whether to persist to the JSON file.
                    Set to False to keep contributions in memory only.
    """
    settings = get_settings()
    confetti_settings = settings.confetti
    logger = structlog.get_logger(__name__)

    audit_storage = InMemoryAuditStorage()
    audit_logger = AuditLogger(audit_storage)

    store: ContributionStoreInterface
    if use_storage:
        try:
            store = JsonFileContributionStore()
        except Exception as e:
            # Storage not configured - continue without it
            logger.warning("storage_unavailable", error=str(e))
            audit_logger.log_error(
                error_type="storage_unavailable",
                error_message=str(e),
                details={"fallback": "in_memory"},
            )
            store = InMemoryContributionStore()
    else:
        store = InMemoryContributionStore()

    scheduler = CooperativeIntervalScheduler()
    surface = PillowSurface(
        confetti_settings.canvas_width,
        confetti_settings.canvas_height,
    )
    frame_driver = LoopFrameDriver(frame_interval_ms=confetti_settings.frame_interval_ms)
    simulator = ParticleSimulator(
        surface=surface,
        frame_driver=frame_driver,
        settings=confetti_settings,
        audit_logger=audit_logger,
    )

    session = ContributionSession(
        store=store,
        notifier=notifier,
        confirmer=confirmer,
        scheduler=scheduler,
        simulator=simulator,
        settings=settings.tracker,
        audit_logger=audit_logger,
    )

    return AppComponents(
        session=session,
        scheduler=scheduler,
        frame_driver=frame_driver,
        surface=surface,
        audit_storage=audit_storage,
    )
