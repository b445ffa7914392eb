from __future__ import annotations

import json

import pytest

from glass.config.models import AppConfig, TeamConfig, TelemetryConfig
from glass.core.enums import Direction, SourceName
from glass.main import run
from glass.runtime.context import create_context
from glass.telemetry.events import FETCH_FAILED, SELECTION_REJECTED


@pytest.mark.asyncio
async def test_run_should_render_every_screen_and_team(app_config, fake_sources) -> None:
    toggles = [("bitcoin", Direction.UP), ("ethereum", Direction.DOWN)]
    async with create_context(app_config, transport=fake_sources.transport()) as context:
        output = await run(context, list(SourceName), toggles)

    assert "== Crypto ==" in output
    assert "Team 2/5" in output
    assert "BTC-PERP 50x" in output
    assert "Will BTC close above $100k this year?" in output
    assert "[1/2] Bitcoin rallies" in output
    assert output.endswith(
        "Your Team\nYour Team (2/5):\n\n"
        "1. Bitcoin (BTC) - Predicted: UP\n"
        "2. Ethereum (ETH) - Predicted: DOWN"
    )
    assert context.closed is True
    assert context.fetchers.crypto.disposed is True


@pytest.mark.asyncio
async def test_run_should_isolate_failed_source(app_config, fake_sources) -> None:
    fake_sources.fail("/info:allMids", status_code=502)
    async with create_context(app_config, transport=fake_sources.transport()) as context:
        output = await run(context, [SourceName.PERPS, SourceName.NEWS], [])

    assert "Failed to fetch Hyperliquid data. Please try again." in output
    assert "Bitcoin rallies" in output
    assert "Your Team" not in output
    assert fake_sources.count("/api/v3/coins/markets") == 0


@pytest.mark.asyncio
async def test_run_should_report_full_team_and_persist_events(fake_sources, tmp_path) -> None:
    config = AppConfig(
        team=TeamConfig(capacity=2),
        telemetry=TelemetryConfig(logs_dir=str(tmp_path / "logs"), events_enabled=True),
    )
    fake_sources.fail("/markets", status_code=500)
    toggles = [("bitcoin", Direction.UP), ("ethereum", Direction.UP), ("solana", Direction.DOWN)]

    async with create_context(config, transport=fake_sources.transport()) as context:
        output = await run(context, [SourceName.CRYPTO, SourceName.PREDICTION], toggles)

    assert "Team Full\nYou can only select up to 2 tokens for your team." in output
    assert "Your Team (2/2):" in output

    event_files = list((tmp_path / "logs").glob("events_*.jsonl"))
    assert len(event_files) == 1
    events = [json.loads(line) for line in event_files[0].read_text(encoding="utf-8").splitlines()]
    types = [event["event_type"] for event in events]
    assert FETCH_FAILED in types
    assert SELECTION_REJECTED in types


@pytest.mark.asyncio
async def test_context_should_reject_toggles_before_crypto_loads(app_config, fake_sources) -> None:
    async with create_context(app_config, transport=fake_sources.transport()) as context:
        decision = context.selection.toggle("bitcoin", Direction.UP)
        assert decision.is_rejected
        await context.fetchers.crypto.load()
        assert context.selection.toggle("bitcoin", Direction.UP).accepted


@pytest.mark.asyncio
async def test_context_close_should_be_idempotent(app_config, fake_sources) -> None:
    context = create_context(app_config, transport=fake_sources.transport())
    await context.aclose()
    await context.aclose()
    assert context.http_client.is_closed


@pytest.mark.asyncio
async def test_run_should_show_empty_crypto_list_and_empty_team(app_config, fake_sources) -> None:
    fake_sources.json("/api/v3/coins/markets", [])

    async with create_context(app_config, transport=fake_sources.transport()) as context:
        output = await run(context, [SourceName.CRYPTO], [("bitcoin", Direction.UP)])
        state = context.fetchers.crypto.state
        team = context.selection.team()

    assert state.data == ()
    assert state.loading is False
    assert state.error is None
    assert state.has_loaded is True
    assert team == ()
    assert "No crypto data available." in output
    assert "Unknown Token" in output
    assert output.endswith("Empty Team\nPlease select at least one token for your team.")
