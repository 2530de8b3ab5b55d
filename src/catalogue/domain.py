"""Catalogue bounded context: the coffee-shop menu.

Owns menu items, their bilingual names, prices and availability. Other
contexts only ever see the catalogue through its published events.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="qahwa")

logger = get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
