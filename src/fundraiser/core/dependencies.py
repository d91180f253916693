import stripe
from fastapi import Depends, Request

from fundraiser.core.config import Settings
from fundraiser.core.exceptions import Unauthenticated
from fundraiser.data_access.memory import MemStorage
from fundraiser.models.donation import User
from fundraiser.services.auth_service import AuthService
from fundraiser.services.donation_service import DonationService


def configure_stripe(settings: Settings) -> None:
    stripe.api_key = settings.STRIPE_SECRET_KEY
    # Failed intents are surfaced to the caller, never retried
    stripe.max_network_retries = 0
    stripe.default_http_client = stripe.RequestsClient(timeout=settings.STRIPE_TIMEOUT_SECONDS)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> MemStorage:
    return request.app.state.storage


def get_auth_service(storage: MemStorage = Depends(get_storage)) -> AuthService:
    return AuthService(storage)


def get_donation_service(
    storage: MemStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings)
) -> DonationService:
    return DonationService(
        storage=storage,
        currency=settings.PAYMENT_CURRENCY,
        minimum_amount=settings.MINIMUM_DONATION
    )


def get_session_token(
    request: Request,
    settings: Settings = Depends(get_app_settings)
) -> str | None:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_user(
    token: str | None = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service)
) -> User:
    user = auth.current_user(token)
    if user is None:
        raise Unauthenticated("Not authenticated")
    return user
