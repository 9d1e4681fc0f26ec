"""Notification, confirmation and timer collaborators."""

from fundtracker.services.notifications.announcer import StaggeredAnnouncer
from fundtracker.services.notifications.interface import (
    ConfirmationInterface,
    IntervalSchedulerInterface,
    NotifierInterface,
)
from fundtracker.services.notifications.scheduler import CooperativeIntervalScheduler

__all__ = [
    "ConfirmationInterface",
    "CooperativeIntervalScheduler",
    "IntervalSchedulerInterface",
    "NotifierInterface",
    "StaggeredAnnouncer",
]
