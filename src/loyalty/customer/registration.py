"""Customer registration: command and handler.

A phone number registers at most once. Registration draws the customer's
card number from the pool in the same unit of work.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from loyalty.card.pool import allocate_card_number
from loyalty.customer.customer import Customer
from loyalty.domain import loyalty
from loyalty.shared.phone import normalize_phone


@loyalty.command(part_of="Customer")
class RegisterCustomer:
    """Create a loyalty account and issue a card."""

    name: String(required=True, max_length=100)
    phone: String(required=True, max_length=20)


def find_by_phone(phone):
    """Return the customer registered with this phone, or None."""
    matches = current_domain.repository_for(Customer)._dao.query.filter(phone=normalize_phone(phone)).all().items
    return matches[0] if matches else None


@loyalty.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        if find_by_phone(command.phone) is not None:
            raise ValidationError({"phone": ["This phone number is already registered"]})

        customer = Customer.register(
            name=command.name,
            phone=command.phone,
            card_number=allocate_card_number(),
        )
        current_domain.repository_for(Customer).add(customer)
        return {"customer_id": str(customer.id), "card_number": customer.card_number}
