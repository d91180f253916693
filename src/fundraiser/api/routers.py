from fastapi import APIRouter, Depends, Response
import logging

from fundraiser.core.config import Settings
from fundraiser.core.dependencies import (
    get_app_settings,
    get_auth_service,
    get_current_user,
    get_donation_service,
    get_session_token,
)
from fundraiser.models.donation import Charity, Donation, User
from fundraiser.services.auth_service import AuthService
from fundraiser.services.donation_service import DonationService
from fundraiser.api.schemas import (
    DonationCreateRequest,
    FundraiserResponse,
    LoginRequest,
    MessageResponse,
    PaymentIntentRequest,
    PaymentIntentResponse,
    RegisterRequest,
    UserResponse,
)

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


def set_session_cookie(response: Response, token: str, settings: Settings):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE
    )


# Auth

@router.post(
    "/register",
    response_model=UserResponse,
    status_code=201
)
def register(
    body: RegisterRequest,
    response: Response,
    current_token: str | None = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings)
):
    user, token = auth.register(
        username=body.username,
        password=body.password,
        full_name=body.full_name,
        current_token=current_token
    )
    set_session_cookie(response, token, settings)
    return UserResponse.from_user(user)


@router.post(
    "/login",
    response_model=UserResponse
)
def login(
    body: LoginRequest,
    response: Response,
    current_token: str | None = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings)
):
    user, token = auth.login(
        username=body.username,
        password=body.password,
        current_token=current_token
    )
    set_session_cookie(response, token, settings)
    return UserResponse.from_user(user)


@router.post(
    "/logout",
    response_model=MessageResponse
)
def logout(
    response: Response,
    token: str | None = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings)
):
    auth.logout(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return MessageResponse(message="Logged out")


@router.get(
    "/user",
    response_model=UserResponse
)
def read_current_user(user: User = Depends(get_current_user)):
    return UserResponse.from_user(user)


# Fundraising

@router.get(
    "/charities",
    response_model=list[Charity]
)
def list_charities(donations: DonationService = Depends(get_donation_service)):
    return donations.list_charities()


@router.get(
    "/donations/{referral_code}",
    response_model=list[Donation]
)
def list_donations(
    referral_code: str,
    donations: DonationService = Depends(get_donation_service)
):
    return donations.list_donations(referral_code)


@router.get(
    "/fundraiser/{referral_code}",
    response_model=FundraiserResponse
)
def get_fundraiser(
    referral_code: str,
    donations: DonationService = Depends(get_donation_service)
):
    user, total = donations.get_fundraiser(referral_code)
    return FundraiserResponse(user=UserResponse.from_user(user), total=total)


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse
)
def create_payment_intent(
    body: PaymentIntentRequest,
    donations: DonationService = Depends(get_donation_service)
):
    client_secret = donations.create_stripe_intent(amount=body.amount)
    return PaymentIntentResponse(client_secret=client_secret)


@router.post(
    "/donations",
    response_model=Donation,
    status_code=201
)
def create_donation(
    body: DonationCreateRequest,
    donations: DonationService = Depends(get_donation_service)
):
    return donations.record_donation(body)
