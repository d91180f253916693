from types import SimpleNamespace

import pytest
import stripe

from fundraiser.core.exceptions import (
    DuplicateUsername,
    InvalidCredentials,
    NotFound,
    UpstreamFailure,
    ValidationError,
)
from fundraiser.core.security import verify_password
from fundraiser.models.donation import NewDonation
from fundraiser.services.auth_service import AuthService
from fundraiser.services.donation_service import DonationService


@pytest.fixture
def auth(storage):
    return AuthService(storage)

@pytest.fixture
def donations(storage):
    return DonationService(storage, currency="inr", minimum_amount=50)


# Identity

def test_register_binds_session_and_hashes_password(auth, storage):
    user, token = auth.register("alice", "secret1", "Alice A")

    assert user.password_hash != "secret1"
    assert verify_password("secret1", user.password_hash)
    assert auth.current_user(token) == user
    assert storage.get_user_by_username("alice") == user


def test_register_duplicate_username(auth, storage):
    first, _ = auth.register("alice", "secret1", "Alice A")
    with pytest.raises(DuplicateUsername):
        auth.register("alice", "another", "Someone Else")
    assert storage.get_user(first.id) == first


def test_login_success_creates_new_session(auth):
    user, register_token = auth.register("alice", "secret1", "Alice A")
    logged_in, token = auth.login("alice", "secret1")

    assert logged_in == user
    assert token != register_token
    assert auth.current_user(token) == user


@pytest.mark.parametrize("username, password", [("alice", "wrong-pass"), ("nobody", "secret1")])
def test_login_rejects_bad_credentials(auth, username, password):
    auth.register("alice", "secret1", "Alice A")
    with pytest.raises(InvalidCredentials):
        auth.login(username, password)


def test_login_with_existing_token_revokes_it(auth):
    _, register_token = auth.register("alice", "secret1", "Alice A")
    user, token = auth.login("alice", "secret1", current_token=register_token)

    assert auth.current_user(register_token) is None
    assert auth.current_user(token) == user


def test_failed_login_keeps_existing_session(auth):
    user, token = auth.register("alice", "secret1", "Alice A")
    with pytest.raises(InvalidCredentials):
        auth.login("alice", "wrong-pass", current_token=token)
    assert auth.current_user(token) == user


def test_logout_returns_to_anonymous_and_is_idempotent(auth):
    _, token = auth.register("alice", "secret1", "Alice A")
    auth.logout(token)
    assert auth.current_user(token) is None
    auth.logout(token)
    auth.logout(None)
    assert auth.current_user(None) is None


# Donations

def test_create_stripe_intent_converts_to_minor_units(donations, payment_intents):
    secret = donations.create_stripe_intent(120)

    assert secret == "pi_test_1_secret_abc"
    assert payment_intents.calls == [
        {"amount": 12000, "currency": "inr", "payment_method_types": ["card"]}
    ]


def test_create_stripe_intent_below_minimum(donations, payment_intents):
    with pytest.raises(ValidationError):
        donations.create_stripe_intent(49)
    assert payment_intents.calls == []


def test_create_stripe_intent_surfaces_stripe_error(donations, payment_intents):
    payment_intents.error = stripe.InvalidRequestError("Amount too large", param="amount")
    with pytest.raises(UpstreamFailure) as excinfo:
        donations.create_stripe_intent(10_000_000)
    assert "Amount too large" in excinfo.value.message


def test_create_stripe_intent_rejects_missing_client_secret(donations, monkeypatch):
    monkeypatch.setattr(
        stripe.PaymentIntent, "create", lambda **kwargs: SimpleNamespace(id="pi_x", client_secret=None)
    )
    with pytest.raises(UpstreamFailure):
        donations.create_stripe_intent(100)


def test_record_donation_validates_references(donations, auth, storage):
    user, _ = auth.register("alice", "secret1", "Alice A")

    def donation(**overrides):
        fields = dict(
            amount=100,
            donor_name="Bob",
            referral_code=user.referral_code,
            charity_id=1,
            stripe_payment_id="pi_1",
        )
        fields.update(overrides)
        return NewDonation(**fields)

    with pytest.raises(NotFound, match="Fundraiser"):
        donations.record_donation(donation(referral_code="UNKNOWN1"))
    with pytest.raises(NotFound, match="Charity"):
        donations.record_donation(donation(charity_id=4))
    with pytest.raises(ValidationError):
        donations.record_donation(donation(amount=49))
    assert storage.donations == {}

    recorded = donations.record_donation(donation(message="Go Alice!"))
    assert recorded.id == 1
    assert recorded.message == "Go Alice!"
    assert donations.get_fundraiser(user.referral_code) == (user, 100)


def test_get_fundraiser_unknown_code(donations):
    with pytest.raises(NotFound):
        donations.get_fundraiser("UNKNOWN1")
