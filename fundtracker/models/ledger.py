"""
Ledger Data Models

Read-only views over the contribution ledger. The ledger itself is a
plain mutable object (see fundtracker.ledger); these models are what
leaves the core: snapshots for the UI and outcomes of an addition.

DESIGN DECISION: Amounts are Decimal with two places, so a snapshot
can be compared and displayed without float drift.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class LedgerSnapshot(BaseModel):
    """
    Point-in-time view of the ledger and its derived metrics.

    This is the read-only query surface of a session.
    """
    model_config = ConfigDict(frozen=True)

    target: Decimal = Field(
        ...,
        gt=0,
        description="Total monetary goal"
    )
    contributions: tuple[Decimal, ...] = Field(
        default_factory=tuple,
        description="Contributions in insertion order"
    )
    total: Decimal = Field(
        ...,
        ge=0,
        description="Sum of all contributions"
    )
    remaining: Decimal = Field(
        ...,
        ge=0,
        description="Amount still missing, floored at zero"
    )
    percent_funded: int = Field(
        ...,
        ge=0,
        le=100,
        description="Rounded percentage of target reached"
    )

    @property
    def contribution_count(self) -> int:
        return len(self.contributions)

    @property
    def can_undo(self) -> bool:
        return bool(self.contributions)


class ContributionOutcome(BaseModel):
    """Result of a successful addition."""
    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount added, rounded to cents (0.00 for sub-cent input)"
    )
    total: Decimal = Field(
        ...,
        ge=0,
        description="Ledger total after the addition"
    )
    previous_percent: int = Field(..., ge=0, le=100)
    percent_funded: int = Field(..., ge=0, le=100)
    crossed_milestones: tuple[int, ...] = Field(
        default_factory=tuple,
        description="Milestones newly reached, ascending"
    )

    @property
    def reached_milestone(self) -> bool:
        return bool(self.crossed_milestones)


class MilestoneProgress(BaseModel):
    """One row of the milestone table."""
    model_config = ConfigDict(frozen=True)

    percent: int = Field(..., ge=1, le=100)
    amount_remaining: Decimal = Field(
        ...,
        ge=0,
        description="What is still missing from the target at this milestone"
    )
    reached: bool = False
