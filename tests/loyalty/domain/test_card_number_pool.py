"""Tests for the CardNumberPool aggregate."""

from loyalty.card.events import CardNumberAssigned
from loyalty.card.pool import SEED_CARD_NUMBERS, CardNumberPool


class TestSeed:
    def test_seed_holds_the_printed_cards(self):
        pool = CardNumberPool.seed()
        assert pool.available_numbers() == [f"CUP-{n}" for n in range(1001, 1051)]
        assert pool.assigned_numbers() == []

    def test_seed_has_fifty_cards(self):
        assert len(SEED_CARD_NUMBERS) == 50


class TestAssign:
    def test_last_printed_card_goes_first(self):
        pool = CardNumberPool.seed()
        assert pool.assign() == "CUP-1050"
        assert pool.assign() == "CUP-1049"

    def test_assign_moves_the_number(self):
        pool = CardNumberPool.seed()
        number = pool.assign()
        assert number not in pool.available_numbers()
        assert pool.assigned_numbers() == [number]

    def test_assign_raises_event(self):
        pool = CardNumberPool.seed()
        pool.assign()

        event = pool._events[-1]
        assert isinstance(event, CardNumberAssigned)
        assert event.card_number == "CUP-1050"
        assert event.synthesized is False
        assert event.remaining == 49

    def test_numbers_are_synthesized_after_the_printed_cards(self):
        pool = CardNumberPool.seed()
        for _ in range(50):
            pool.assign()

        assert pool.available_numbers() == []
        assert pool.assign() == "CUP-2050"
        assert pool.assign() == "CUP-2051"
        assert pool._events[-1].synthesized is True

    def test_no_number_is_handed_out_twice(self):
        pool = CardNumberPool.seed()
        numbers = [pool.assign() for _ in range(60)]
        assert len(set(numbers)) == 60

    def test_synthesis_skips_numbers_already_taken(self):
        pool = CardNumberPool.seed(numbers=[])
        pool.assigned = '["CUP-2001"]'
        assert pool.assign() == "CUP-2002"
