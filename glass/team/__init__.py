"""Team selection subsystem package."""

from .models import SelectionDecision, SelectionEntry, TeamMember
from .selection_engine import DEFAULT_CAPACITY, SelectionEngine
from .summary import Notice, describe_rejection, describe_team

__all__ = [
    "DEFAULT_CAPACITY",
    "Notice",
    "SelectionDecision",
    "SelectionEngine",
    "SelectionEntry",
    "TeamMember",
    "describe_rejection",
    "describe_team",
]
