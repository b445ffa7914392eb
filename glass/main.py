"""Command-line entry point.

Usage::

    python -m glass.main
    python -m glass.main --source crypto --up bitcoin --down ethereum
    python -m glass.main --config config/app.yml --source news --source perps

Loads the requested sources concurrently, applies ``--up``/``--down`` toggles
through the selection engine (in the order given) and prints each screen
followed by the team overview. Failed sources are shown as error banners; the
exit code stays 0 unless configuration cannot be loaded.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from glass.config.loader import load_app_config
from glass.config.models import AppConfig
from glass.core.enums import Direction, SourceName
from glass.interfaces.carousel import NewsCarousel
from glass.interfaces.console import (
    render_crypto_screen,
    render_news_screen,
    render_notice,
    render_perps_screen,
    render_prediction_screen,
    render_screens,
)
from glass.runtime.context import AppContext, create_context
from glass.sources.registry import load_all
from glass.team.summary import describe_rejection, describe_team
from glass.telemetry import configure_logging


class _ToggleAction(argparse.Action):
    """Collect ``--up``/``--down`` values as ordered ``(asset_id, direction)`` pairs."""

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        toggles = list(getattr(namespace, self.dest) or [])
        toggles.append((values, Direction(self.const)))
        setattr(namespace, self.dest, toggles)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glass",
        description="Market dashboard: spot crypto, perps, prediction markets, news and a 5-token team.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to app.yml (default: config/app.yml)")
    parser.add_argument(
        "--source",
        action="append",
        choices=[name.value for name in SourceName],
        help="Source to load (repeatable, default: all)",
    )
    parser.add_argument("--up", dest="toggles", action=_ToggleAction, const=Direction.UP.value, metavar="ASSET_ID")
    parser.add_argument("--down", dest="toggles", action=_ToggleAction, const=Direction.DOWN.value, metavar="ASSET_ID")
    parser.add_argument("--log-level", default=None, help="Override telemetry.log_level")
    return parser


def _requested_sources(names: Optional[Sequence[str]], toggles: Sequence[Tuple[str, Direction]]) -> List[SourceName]:
    selected = list(dict.fromkeys(SourceName(name) for name in names)) if names else list(SourceName)
    if toggles and SourceName.CRYPTO not in selected:
        selected.insert(0, SourceName.CRYPTO)
    return selected


async def run(context: AppContext, sources: Sequence[SourceName], toggles: Sequence[Tuple[str, Direction]]) -> str:
    """Load ``sources``, apply ``toggles`` and return the rendered output."""

    fetchers = context.fetchers
    carousel = NewsCarousel()
    unsubscribe = carousel.bind(fetchers.news)
    try:
        await load_all(fetchers.get(name) for name in sources)
    finally:
        unsubscribe()

    notices: List[str] = []
    for asset_id, direction in toggles:
        decision = context.selection.toggle(asset_id, direction)
        notice = describe_rejection(decision)
        if notice is not None:
            notices.append(render_notice(notice))

    blocks: List[str] = []
    for name in sources:
        if name is SourceName.CRYPTO:
            blocks.append(render_crypto_screen(fetchers.crypto.state, context.selection))
        elif name is SourceName.PERPS:
            blocks.append(render_perps_screen(fetchers.perps.state))
        elif name is SourceName.PREDICTION:
            blocks.append(render_prediction_screen(fetchers.prediction.state))
        elif name is SourceName.NEWS:
            blocks.append(render_news_screen(fetchers.news.state, carousel))
    blocks.extend(notices)
    if toggles:
        roster = context.selection.roster(fetchers.crypto.state.data)
        blocks.append(render_notice(describe_team(roster, context.selection.capacity)))
    return render_screens(blocks)


async def _main_async(config: AppConfig, args: argparse.Namespace, logger: logging.Logger) -> int:
    toggles = args.toggles or []
    sources = _requested_sources(args.source, toggles)
    async with create_context(config) as context:
        output = await run(context, sources, toggles)
    print(output)
    logger.info("Run complete", extra={"sources": [name.value for name in sources], "n_toggles": len(toggles)})
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    try:
        config = load_app_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"Failed to load configuration: {exc}", file=sys.stderr)
        return 2
    level = args.log_level or config.telemetry.log_level
    logger = configure_logging(log_dir=Path(config.telemetry.logs_dir), level=level, stream=False)
    logger.info("Bootstrapping dashboard")
    try:
        return asyncio.run(_main_async(config, args, logger))
    except KeyboardInterrupt:  # pragma: no cover - manual exit
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
