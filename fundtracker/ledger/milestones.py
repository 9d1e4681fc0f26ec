"""
Milestone Detection

Pure functions over percentages. Called once per addition with the
percent funded immediately before and after the mutation.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from fundtracker.models.ledger import MilestoneProgress


CENTS = Decimal("0.01")


def crossed(
    prev_percent: int,
    new_percent: int,
    thresholds: Iterable[int],
) -> list[int]:
    """
    Thresholds newly reached by moving from prev_percent to new_percent.

    Returns every m with prev_percent < m <= new_percent, ascending.
    A single large addition can cross several thresholds at once;
    an addition too small to move the rounded percentage crosses none.
    """
    return sorted(m for m in thresholds if prev_percent < m <= new_percent)


def milestone_progress(
    target: Decimal,
    thresholds: Sequence[int],
    percent_funded: int,
) -> list[MilestoneProgress]:
    """
    Build the milestone table: what is still missing at each threshold.

    The amount at milestone m is target * (1 - m / 100), floored at zero.
    """
    rows = []
    for m in thresholds:
        amount = target * (1 - Decimal(m) / 100)
        amount = max(Decimal("0"), amount).quantize(CENTS, rounding=ROUND_HALF_UP)
        rows.append(MilestoneProgress(
            percent=m,
            amount_remaining=amount,
            reached=percent_funded >= m,
        ))
    return rows
