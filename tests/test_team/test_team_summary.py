from __future__ import annotations

from glass.core.enums import Direction, SelectionAction
from glass.core.types import AssetId
from glass.team.models import REASON_CAPACITY_EXCEEDED, REASON_UNKNOWN_ASSET, SelectionDecision, TeamMember
from glass.team.summary import describe_rejection, describe_team


def test_describe_team_should_warn_on_empty_team() -> None:
    notice = describe_team([], 5)
    assert notice.title == "Empty Team"
    assert notice.message == "Please select at least one token for your team."
    assert notice.ok is False


def test_describe_team_should_number_members(asset_factory) -> None:
    members = [
        TeamMember(asset_factory("bitcoin", name="Bitcoin", symbol="BTC"), Direction.UP),
        TeamMember(asset_factory("solana", name="Solana", symbol="SOL"), Direction.DOWN),
    ]

    notice = describe_team(members, 5)

    assert notice.title == "Your Team"
    assert notice.message == (
        "Your Team (2/5):\n\n"
        "1. Bitcoin (BTC) - Predicted: UP\n"
        "2. Solana (SOL) - Predicted: DOWN"
    )


def _decision(action, reason=None) -> SelectionDecision:
    return SelectionDecision(
        asset_id=AssetId("ripple"),
        direction=Direction.UP,
        action=action,
        team_size=5,
        capacity=5,
        reason=reason,
    )


def test_describe_rejection_should_explain_full_team() -> None:
    notice = describe_rejection(_decision(SelectionAction.REJECTED, REASON_CAPACITY_EXCEEDED))
    assert notice.title == "Team Full"
    assert notice.message == "You can only select up to 5 tokens for your team."


def test_describe_rejection_should_explain_unknown_token() -> None:
    notice = describe_rejection(_decision(SelectionAction.REJECTED, REASON_UNKNOWN_ASSET))
    assert notice.title == "Unknown Token"
    assert "ripple" in notice.message


def test_describe_rejection_should_ignore_accepted_toggles() -> None:
    assert describe_rejection(_decision(SelectionAction.ADDED)) is None
