"""Loyalty rewards: stamping orders and redeeming free drinks."""

from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from loyalty.customer.customer import Customer
from loyalty.domain import loyalty


@loyalty.command(part_of="Customer")
class RecordCompletedOrder:
    customer_id: Identifier(required=True)
    order_id: Identifier(required=True)
    used_free_drink: Boolean(default=False)


@loyalty.command(part_of="Customer")
class UseFreeDrink:
    customer_id: Identifier(required=True)


@loyalty.command_handler(part_of=Customer)
class LoyaltyRewardsHandler:
    @handle(RecordCompletedOrder)
    def record_completed_order(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        recorded = customer.record_completed_order(
            order_id=command.order_id,
            used_free_drink=command.used_free_drink,
        )
        if recorded:
            repo.add(customer)
        return recorded

    @handle(UseFreeDrink)
    def use_free_drink(self, command):
        repo = current_domain.repository_for(Customer)
        customer = repo.get(command.customer_id)
        remaining = customer.use_free_drink()
        repo.add(customer)
        return remaining
