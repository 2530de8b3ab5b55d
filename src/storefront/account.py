"""Customer account: guest mode and the cached loyalty profile."""

import structlog
from pydantic import BaseModel, ValidationError

from storefront import keys
from storefront.errors import ApiError, NotRegistered
from storefront.storage.port import KeyValueStore

logger = structlog.get_logger(__name__)


class CustomerProfile(BaseModel):
    customer_id: str
    name: str
    phone: str
    card_number: str
    stamps: int = 0
    free_drinks: int = 0


class RedemptionResult(BaseModel):
    success: bool
    free_drinks: int
    message: str | None = None


class CustomerAccount:
    def __init__(self, api, store: KeyValueStore):
        self.api = api
        self.store = store

    # -------------------------------------------------------------------
    # Local state
    # -------------------------------------------------------------------
    def profile(self) -> CustomerProfile | None:
        document = self.store.read_json(keys.CUSTOMER_PROFILE)
        if document is None:
            return None
        try:
            return CustomerProfile.model_validate(document)
        except ValidationError:
            logger.warning("Discarding unreadable customer profile")
            return None

    def _save_profile(self, document: dict) -> CustomerProfile:
        profile = CustomerProfile.model_validate(document)
        self.store.write_json(keys.CUSTOMER_PROFILE, profile.model_dump())
        self.store.remove(keys.GUEST_MODE)
        return profile

    def is_guest(self) -> bool:
        return self.store.read_json(keys.GUEST_MODE, default=False) is True or self.profile() is None

    def customer_id(self) -> str | None:
        if self.is_guest():
            return None
        return self.profile().customer_id

    def continue_as_guest(self) -> None:
        self.store.remove(keys.CUSTOMER_PROFILE)
        self.store.write_json(keys.GUEST_MODE, True)

    def logout(self) -> None:
        self.store.remove(keys.CUSTOMER_PROFILE)
        self.store.remove(keys.GUEST_MODE)

    # -------------------------------------------------------------------
    # Server calls
    # -------------------------------------------------------------------
    def register(self, name: str, phone: str) -> CustomerProfile:
        registered = self.api.register_customer(name, phone)
        profile = self._save_profile(self.api.get_customer(registered["customer_id"]))
        logger.info("Customer registered", customer_id=profile.customer_id, card_number=profile.card_number)
        return profile

    def sign_in(self, phone: str) -> CustomerProfile:
        return self._save_profile(self.api.find_customer(phone))

    def refresh(self) -> CustomerProfile | None:
        profile = self.profile()
        if profile is None:
            return None
        return self._save_profile(self.api.get_customer(profile.customer_id))

    def use_free_drink(self) -> RedemptionResult:
        """Spend a free drink at the counter; a zero balance is reported, not raised."""
        profile = self.profile()
        if profile is None:
            raise NotRegistered("Free drinks need a registered loyalty card")

        try:
            balance = self.api.redeem_free_drink(profile.customer_id)
        except ApiError as exc:
            return RedemptionResult(success=False, free_drinks=profile.free_drinks, message=exc.detail)

        self.store.write_json(
            keys.CUSTOMER_PROFILE,
            profile.model_copy(update={"free_drinks": balance["free_drinks"]}).model_dump(),
        )
        return RedemptionResult(success=True, free_drinks=balance["free_drinks"])
