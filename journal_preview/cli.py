"""Command-line interface for the journal_preview application."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pprint
from pathlib import Path
from typing import List, Optional

from .config import parse_app_config
from .runner import RunConfig, RunResult, execute

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Render the latest journal entries into the site homepage."
    )
    parser.add_argument(
        "--config",
        default="configs/config.xml",
        help="Path to the main configuration XML file.",
    )

    # Overrides for logging/debugging
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides config.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides config.",
    )

    parser.add_argument(
        "--page",
        metavar="PATH",
        help="HTML page to process. Overrides config.",
    )
    parser.add_argument(
        "--output",
        metavar="PATH",
        help="Write the processed page to PATH instead of printing it. Overrides config.",
    )
    parser.add_argument(
        "--current-path",
        metavar="URL_PATH",
        help="Site path of the page (e.g. /about.html) used to highlight the nav link.",
    )

    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Initialise logging according to options."""
    log_level = getattr(logging, level_name.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        if log_path.parent and not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.debug(
            "journal-preview logging at %s to console and %s",
            level_name.upper(),
            log_path,
        )
    else:
        logger.debug(
            "journal-preview logging at %s to console only", level_name.upper()
        )


def describe_result(result: RunResult) -> str:
    """One-line summary of what happened to the page."""
    if result.outcome is None:
        return "Journal preview inactive: page has no preview grid."
    if result.outcome.succeeded:
        return f"Rendered {result.outcome.rendered} journal preview card(s)."
    return f"Journal preview degraded: {result.outcome.message}"


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = parse_app_config(args.config)

        # Determine logging settings (CLI overrides Config)
        log_level = args.log_level or app_config.logging.level
        log_file = args.log_file or app_config.logging.file

        configure_logging(log_level, log_file)

        config = RunConfig(
            page_path=args.page or app_config.page,
            output_path=args.output or app_config.output,
            base_url=app_config.base_url,
            json_url=app_config.json_url,
            max_cards=app_config.max_cards,
            grid_id=app_config.grid_id,
            fallback_id=app_config.fallback_id,
            listing_url=app_config.listing_url,
            transport=app_config.transport,
            timeout=app_config.timeout,
            locale=app_config.locale,
            current_path=args.current_path or app_config.current_path,
            consent_store=app_config.consent.store,
            clarity_id=app_config.consent.clarity_id,
        )

        logger.info(
            "Active Configuration:\n%s", pprint.pformat(dataclasses.asdict(config))
        )

        result = execute(config)
    except ValueError as exc:
        parser.error(str(exc))
    except (RuntimeError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error during execution.")
        return 1

    if result.output_path:
        print(describe_result(result))
    else:
        print(result.output_text)
    return 0
