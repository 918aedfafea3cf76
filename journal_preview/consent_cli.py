"""CLI for recording or resetting the analytics consent decision."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .consent import ConsentState, ConsentStore

logger = logging.getLogger(__name__)

ACTIONS = {
    "accept": ConsentState.ANALYTICS,
    "decline": ConsentState.NECESSARY,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manage the stored analytics consent decision."
    )
    parser.add_argument(
        "action",
        choices=("accept", "decline", "reset", "show"),
        help="accept analytics, keep necessary cookies only, forget the decision, or print it.",
    )
    parser.add_argument(
        "--store",
        default="consent.json",
        help="JSON file holding the consent decision.",
    )
    return parser


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging()

    store = ConsentStore(args.store)
    if args.action in ACTIONS:
        store.set(ACTIONS[args.action])
    elif args.action == "reset":
        store.clear()

    state = store.get()
    print(state.value if state else "undecided")
    return 0


if __name__ == "__main__":
    import sys

    sys.exit(main())
