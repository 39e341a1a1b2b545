"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pdf_overlay.config.settings import SettingsError, load_settings
from pdf_overlay.pipeline import run_pipeline
from pdf_overlay.watch.watcher import watch

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Overlay configured text and option marks onto a PDF template."
    )
    parser.add_argument("--env", default=".env", help="Path to the settings file (default: .env).")
    parser.add_argument("--once", action="store_true", help="Run once and exit instead of watching.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    env_path = Path(args.env)

    try:
        settings = load_settings(env_path)
    except SettingsError as exc:
        logger.error("%s", exc)
        return 2

    if args.once:
        try:
            run_pipeline(settings)
        except Exception:
            logger.exception("Overlay run failed")
            return 1
        return 0

    # Settings are rebuilt for each run; the watched paths come from the first load.
    return watch(
        [settings.positions, settings.values],
        lambda: run_pipeline(load_settings(env_path)),
    )


if __name__ == "__main__":
    raise SystemExit(main())
