"""User-facing messages for the team: the team overview and the full-team notice."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .models import REASON_CAPACITY_EXCEEDED, SelectionDecision, TeamMember


@dataclass(frozen=True, slots=True)
class Notice:
    """Title/message pair shown to the user (alert-style)."""

    title: str
    message: str
    ok: bool = True


def describe_team(members: Sequence[TeamMember], capacity: int) -> Notice:
    """Numbered team overview, or an "Empty Team" notice when nothing is selected."""

    if not members:
        return Notice("Empty Team", "Please select at least one token for your team.", ok=False)
    lines = [f"Your Team ({len(members)}/{capacity}):", ""]
    for index, member in enumerate(members, start=1):
        asset = member.asset
        lines.append(f"{index}. {asset.name} ({asset.symbol}) - Predicted: {member.direction.value.upper()}")
    return Notice("Your Team", "\n".join(lines))


def describe_rejection(decision: SelectionDecision) -> Notice | None:
    """Notice for a rejected toggle, ``None`` when the toggle was applied."""

    if decision.accepted:
        return None
    if decision.reason == REASON_CAPACITY_EXCEEDED:
        return Notice(
            "Team Full",
            f"You can only select up to {decision.capacity} tokens for your team.",
            ok=False,
        )
    return Notice("Unknown Token", f"{decision.asset_id} is not in the current market list.", ok=False)


__all__ = ["Notice", "describe_rejection", "describe_team"]
