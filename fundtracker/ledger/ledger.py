"""
Contribution Ledger

DESIGN DECISION: Amounts are rounded to cents at the moment they are
added, never at query time. Every derived figure (total, remaining,
percent funded) is recomputed from the stored amounts, so summation
carries at most one rounding step per entry.

The ledger knows nothing about storage, milestones or the UI. It is a
plain in-memory object owned by one session.
"""

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from typing import Any, Iterable

from fundtracker.models.ledger import LedgerSnapshot


CENTS = Decimal("0.01")
WHOLE = Decimal("1")

# Wide enough that sums and quantizing stay exact for any realistic amount
MONEY_CONTEXT = Context(prec=60, rounding=ROUND_HALF_UP)


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class InvalidAmountError(LedgerError):
    """Amount is not a finite number greater than zero."""

    def __init__(self, value: Any, message: str = "Enter a valid positive number."):
        self.value = value
        super().__init__(message)


class EmptyLedgerError(LedgerError):
    """Nothing to remove."""

    def __init__(self, message: str = "Nothing to undo."):
        super().__init__(message)


def to_cents(value: Any, allow_zero: bool = False) -> Decimal:
    """
    Convert a user or stored value into an amount in cents.

    Accepts ints, floats, Decimals and numeric strings. Floats go through
    their shortest repr so 0.1 becomes 0.10, not 0.1000000000000000055.
    The value is validated before rounding, so 0.004 is accepted and
    stored as 0.00. Rounding is half-up.

    Args:
        value: Amount to convert
        allow_zero: Accept 0 as well. Used for persisted amounts, which
                    may hold additions that rounded down to zero.

    Raises:
        InvalidAmountError: non-numeric, non-finite, not above zero
            (or below zero with allow_zero), or too large to hold
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError(value)

    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, (int, float, str)):
            amount = Decimal(str(value).strip())
        else:
            raise InvalidAmountError(value)
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(value)

    if not amount.is_finite():
        raise InvalidAmountError(value)
    if amount < 0 or (amount == 0 and not allow_zero):
        raise InvalidAmountError(value)

    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP, context=MONEY_CONTEXT)
    except InvalidOperation:
        # More digits than MONEY_CONTEXT can hold
        raise InvalidAmountError(value)


class Ledger:
    """
    Ordered sequence of contributions toward a fixed target.

    Append-only, except for removing the most recent entry (undo)
    and clearing everything (reset).
    """

    def __init__(self, target: Decimal, contributions: Iterable[Any] = ()):
        """
        Args:
            target: Funding goal, must be greater than zero
            contributions: Previously persisted amounts, oldest first
        """
        target = Decimal(str(target))
        if not target.is_finite() or target <= 0:
            raise ValueError(f"Target must be greater than zero, got {target}")
        self._target = target.quantize(CENTS, rounding=ROUND_HALF_UP, context=MONEY_CONTEXT)
        self._contributions: list[Decimal] = [
            to_cents(c, allow_zero=True) for c in contributions
        ]

    def __len__(self) -> int:
        return len(self._contributions)

    @property
    def target(self) -> Decimal:
        return self._target

    @property
    def contributions(self) -> tuple[Decimal, ...]:
        return tuple(self._contributions)

    def add(self, amount: Any) -> tuple[Decimal, int]:
        """
        Append a contribution.

        Returns:
            (new_total, new_percent_funded)

        Raises:
            InvalidAmountError: amount is not a finite number above zero.
                The ledger is left unchanged.
        """
        self._contributions.append(to_cents(amount))
        return self.total(), self.percent_funded()

    def undo_last(self) -> Decimal:
        """
        Remove and return the most recent contribution.

        Raises:
            EmptyLedgerError: there is nothing to remove
        """
        if not self._contributions:
            raise EmptyLedgerError()
        return self._contributions.pop()

    def reset(self) -> int:
        """Clear all contributions. Returns how many were removed."""
        cleared = len(self._contributions)
        self._contributions.clear()
        return cleared

    def total(self) -> Decimal:
        with localcontext(MONEY_CONTEXT):
            return sum(self._contributions, Decimal("0.00"))

    def remaining(self) -> Decimal:
        """Amount still missing, floored at zero."""
        with localcontext(MONEY_CONTEXT):
            remaining = max(Decimal("0"), self._target - self.total())
            return remaining.quantize(CENTS)

    def percent_funded(self) -> int:
        """
        Integer percentage of the target reached, capped at 100.

        Rounded half-up, so it can read 100 a little before the total
        actually meets the target.
        """
        with localcontext(MONEY_CONTEXT):
            ratio = self.total() / self._target * 100
            return min(100, int(ratio.quantize(WHOLE)))

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            target=self._target,
            contributions=self.contributions,
            total=self.total(),
            remaining=self.remaining(),
            percent_funded=self.percent_funded(),
        )
