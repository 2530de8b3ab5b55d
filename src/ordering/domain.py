"""Ordering bounded context: session carts and orders.

Handles the server-side shopping cart keyed by the storefront session, the
mirrored menu prices it is priced against, and the order lifecycle from
checkout to hand-over.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="qahwa")

ordering = Domain(name="ordering")

logger = get_logger(__name__)
