#!/usr/bin/env python
"""CLI utility to register resource slugs in the registry."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from access_core.core.config import get_settings
from access_core.core.database import session_scope
from access_core.services.resources import ResourceService


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Register resources that roles can be granted on.")
    parser.add_argument(
        "slugs",
        nargs="*",
        help="Resource slugs to register. Defaults to ACR_DEFAULT_RESOURCES.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    slugs = args.slugs or get_settings().default_resources
    try:
        with session_scope() as session:
            ResourceService(session).ensure_baseline_resources(slugs)
    except SQLAlchemyError as exc:
        logging.error("Resource seeding failed: %s", exc)
        return 1

    logging.info("Registered resources: %s", ", ".join(slugs))
    return 0


if __name__ == "__main__":
    sys.exit(main())
