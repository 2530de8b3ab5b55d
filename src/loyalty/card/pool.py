"""CardNumberPool aggregate: the finite supply of printed loyalty card numbers.

The pool starts with the printed cards ``CUP-1001`` … ``CUP-1050``. Numbers
are handed out last-in first-out, so the first customer receives ``CUP-1050``.
Once the printed cards run out, numbers are synthesized as
``CUP-<2000 + assigned count>``. A number is never handed out twice.
"""

import json

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from loyalty.card.events import CardNumberAssigned
from loyalty.domain import loyalty

DEFAULT_POOL_ID = "default"
SEED_CARD_NUMBERS = tuple(f"CUP-{number}" for number in range(1001, 1051))
SYNTHETIC_BASE = 2000


@loyalty.aggregate
class CardNumberPool:
    pool_id: Identifier(identifier=True, required=True)
    available: Text(default="[]")  # JSON list, next number to hand out is last
    assigned: Text(default="[]")  # JSON list, in assignment order

    @invariant.post
    def assigned_numbers_never_return_to_the_pool(self):
        overlap = set(self.available_numbers()) & set(self.assigned_numbers())
        if overlap:
            raise ValidationError({"available": [f"Already assigned: {', '.join(sorted(overlap))}"]})

    @classmethod
    def seed(cls, pool_id=DEFAULT_POOL_ID, numbers=SEED_CARD_NUMBERS):
        return cls(pool_id=pool_id, available=json.dumps(list(numbers)), assigned=json.dumps([]))

    def available_numbers(self) -> list[str]:
        return json.loads(self.available) if self.available else []

    def assigned_numbers(self) -> list[str]:
        return json.loads(self.assigned) if self.assigned else []

    def assign(self) -> str:
        """Hand out the next card number."""
        available = self.available_numbers()
        assigned = self.assigned_numbers()

        if available:
            number = available.pop()
            synthesized = False
        else:
            taken = set(assigned)
            counter = SYNTHETIC_BASE + len(assigned)
            while f"CUP-{counter}" in taken:
                counter += 1
            number = f"CUP-{counter}"
            synthesized = True

        assigned.append(number)
        with atomic_change(self):
            self.available = json.dumps(available)
            self.assigned = json.dumps(assigned)

        self.raise_(
            CardNumberAssigned(
                pool_id=self.pool_id,
                card_number=number,
                synthesized=synthesized,
                remaining=len(available),
            )
        )
        return number


def allocate_card_number(pool_id=DEFAULT_POOL_ID) -> str:
    """Assign a number from the pool, seeding the pool on first use."""
    repo = current_domain.repository_for(CardNumberPool)
    try:
        pool = repo.get(pool_id)
    except ObjectNotFoundError:
        pool = CardNumberPool.seed(pool_id=pool_id)

    number = pool.assign()
    repo.add(pool)
    return number
