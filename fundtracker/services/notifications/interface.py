"""
Host Collaborator Interfaces

The session never shows anything, asks anything or waits for anything
by itself. It talks to the host through these narrow contracts, so a
Streamlit page, a terminal or a test fake can stand behind them.
"""

from abc import ABC, abstractmethod
from typing import Callable, Hashable


class NotifierInterface(ABC):
    """Shows short messages to the user."""

    @abstractmethod
    def notify(self, message: str, duration_ms: int) -> None:
        """
        Show a message, replacing any message currently displayed.

        Fire-and-forget: the notifier schedules its own dismissal.
        """
        pass


class ConfirmationInterface(ABC):
    """Asks the user a yes/no question before destructive actions."""

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Return True only if the user explicitly agreed."""
        pass


class IntervalSchedulerInterface(ABC):
    """Repeating timers owned by the host."""

    @abstractmethod
    def set_interval(self, callback: Callable[[], None], interval_ms: int) -> Hashable:
        """
        Call `callback` every `interval_ms` until cleared.

        Returns:
            Handle to pass to clear_interval
        """
        pass

    @abstractmethod
    def clear_interval(self, handle: Hashable) -> None:
        """Stop a repeating timer. Unknown handles are ignored."""
        pass
