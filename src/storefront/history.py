"""Local order history: the orders placed from this device, newest first."""

from decimal import Decimal

import structlog
from pydantic import BaseModel, Field, ValidationError

from storefront import keys
from storefront.storage.port import KeyValueStore

logger = structlog.get_logger(__name__)

MAX_LOCAL_ORDERS = 50


class LocalOrderItem(BaseModel):
    id: str
    display_name: str
    quantity: int = Field(ge=1)
    unit_price: Decimal


class LocalOrderRecord(BaseModel):
    order_number: str
    items: list[LocalOrderItem]
    total_amount: Decimal
    payment_method: str
    used_free_drink: bool = False
    created_at: str


class OrderHistory:
    def __init__(self, store: KeyValueStore, limit: int = MAX_LOCAL_ORDERS):
        self.store = store
        self.limit = limit

    def records(self) -> list[LocalOrderRecord]:
        documents = self.store.read_json(keys.LOCAL_ORDERS, default=[])
        if not isinstance(documents, list):
            logger.warning("Discarding local order history with unexpected shape")
            return []

        records = []
        for document in documents:
            try:
                records.append(LocalOrderRecord.model_validate(document))
            except ValidationError:
                logger.warning("Skipping unreadable local order record")
        return records

    def _save(self, records: list[LocalOrderRecord]) -> None:
        self.store.write_json(keys.LOCAL_ORDERS, [record.model_dump(mode="json") for record in records])

    def append(self, record: LocalOrderRecord) -> None:
        """Put the record first, dropping the oldest beyond the limit."""
        self._save([record, *self.records()][: self.limit])

    def remove(self, order_number: str) -> None:
        self._save([record for record in self.records() if record.order_number != order_number])

    def clear(self) -> None:
        self.store.remove(keys.LOCAL_ORDERS)
