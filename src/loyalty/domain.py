"""Loyalty bounded context: loyalty cards, stamps and free drinks.

Registered customers carry a card whose number is drawn from a finite pool.
Every paid order earns a stamp; five stamps convert into one free drink.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="qahwa")

logger = get_logger(__name__)

# Domain Composition Root
loyalty = Domain(name="loyalty")
