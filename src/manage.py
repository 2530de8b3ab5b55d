"""Qahwa database management CLI.

Creates and drops database schemas for the Catalogue, Ordering and Loyalty
domains using shared.db.

Usage:
    python src/manage.py setup-db                   # Create all tables
    python src/manage.py drop-db --domain loyalty   # Drop one domain's tables
"""

import argparse
import importlib
import sys

import structlog

from shared.db import drop_db, setup_db

logger = structlog.get_logger(__name__)

DOMAIN_NAMES = ("catalogue", "ordering", "loyalty")


def _load_domains(names=None):
    for name in names or DOMAIN_NAMES:
        domain = getattr(importlib.import_module(f"{name}.domain"), name)
        domain.init()
        yield name, domain


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    for name, domain in _load_domains(domains):
        setup_db(domain)
        logger.info("Schema ready", domain=name)


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    for name, domain in _load_domains(domains):
        drop_db(domain)
        logger.info("Schema dropped", domain=name)


def main():
    parser = argparse.ArgumentParser(description="Qahwa database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (("setup-db", "Create all database tables"), ("drop-db", "Drop all database tables")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--domain",
            choices=DOMAIN_NAMES,
            nargs="*",
            help="Specific domain(s) to target (default: all)",
        )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
