"""Protean Engine runner for the Qahwa domains.

Starts Engine workers that process events asynchronously, including the
cross-domain reactions: Ordering mirrors catalogue prices, and Loyalty stamps
cards when orders are placed.

Usage:
    python src/server.py                    # Run all domain engines
    python src/server.py --domain loyalty   # Run only the loyalty engine
"""

import argparse
import asyncio
import importlib

from protean.server.engine import Engine

DOMAIN_NAMES = ("catalogue", "ordering", "loyalty")


def _get_domain(name):
    """Import and initialize a domain by name."""
    if name not in DOMAIN_NAMES:
        raise ValueError(f"Unknown domain: {name}")

    domain = getattr(importlib.import_module(f"{name}.domain"), name)
    domain.init()
    return domain


async def run(domain_names):
    engines = [Engine(_get_domain(name)) for name in domain_names]
    await asyncio.gather(*(engine.run() for engine in engines))


def main():
    parser = argparse.ArgumentParser(description="Qahwa Engine runner")
    parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        help="Run a single domain engine (default: run all)",
    )
    args = parser.parse_args()

    domain_names = [args.domain] if args.domain else list(DOMAIN_NAMES)

    asyncio.run(run(domain_names))


if __name__ == "__main__":
    main()
