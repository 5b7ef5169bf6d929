"""
Real-time synchronization for RecruitDesk.

Live MongoDB queries feed a per-session DashboardState.
"""

from recruitdesk.sync.realtime import RealtimeSync, Subscription, normalize_document
from recruitdesk.sync.state import DashboardState, bind_realtime

__all__ = [
    "RealtimeSync",
    "Subscription",
    "normalize_document",
    "DashboardState",
    "bind_realtime",
]
