import logging
import stripe

from fundraiser.core.exceptions import NotFound, UpstreamFailure, ValidationError
from fundraiser.data_access.memory import MemStorage
from fundraiser.models.donation import Charity, Donation, NewDonation, User

logger = logging.getLogger(__name__)

# Amounts arrive in major currency units; Stripe expects minor units
MINOR_UNITS = 100


class DonationService:
    def __init__(
        self,
        storage: MemStorage,
        currency: str = "inr",
        minimum_amount: int = 50
    ):
        self.storage = storage
        self.currency = currency
        self.minimum_amount = minimum_amount

    def check_minimum(self, amount: int):
        if amount < self.minimum_amount:
            raise ValidationError(f"Minimum donation amount is {self.minimum_amount}")

    def create_stripe_intent(self, amount: int) -> str:
        self.check_minimum(amount)

        try:
            intent = stripe.PaymentIntent.create(
                amount=amount * MINOR_UNITS,
                currency=self.currency,
                payment_method_types=["card"]
            )
        except stripe.StripeError as e:
            logger.error(f"Error creating Stripe intent: {e}")
            raise UpstreamFailure(e.user_message or str(e)) from e

        client_secret = getattr(intent, "client_secret", None)
        if not client_secret:
            logger.error("Stripe returned a payment intent without a client secret.")
            raise UpstreamFailure("Payment provider returned an invalid response")

        logger.info(f"Created payment intent {intent.id} for {amount} {self.currency}.")
        return client_secret

    def record_donation(self, new_donation: NewDonation) -> Donation:
        """
        Store a donation confirmed on the client.

        stripe_payment_id is kept verbatim; it is not looked up on Stripe.
        """
        self.check_minimum(new_donation.amount)

        if self.storage.get_user_by_referral_code(new_donation.referral_code) is None:
            raise NotFound("Fundraiser not found")

        if self.storage.get_charity(new_donation.charity_id) is None:
            raise NotFound("Charity not found")

        return self.storage.create_donation(new_donation)

    def get_fundraiser(self, referral_code: str) -> tuple[User, int]:
        user = self.storage.get_user_by_referral_code(referral_code)
        if user is None:
            raise NotFound("Fundraiser not found")
        return user, self.storage.get_total_donations_by_referral_code(user.referral_code)

    def list_donations(self, referral_code: str) -> list[Donation]:
        return self.storage.get_donations_by_referral_code(referral_code)

    def list_charities(self) -> list[Charity]:
        return self.storage.get_all_charities()
