import logging
import secrets
import string
import threading
from itertools import count

from fundraiser.core.exceptions import DuplicateUsername
from fundraiser.data_access.sessions import SessionStore
from fundraiser.models.donation import (
    Charity,
    Donation,
    NewCharity,
    NewDonation,
    NewUser,
    User,
    utc_now,
)

logger = logging.getLogger(__name__)

REFERRAL_CODE_LENGTH = 8
REFERRAL_ALPHABET = string.ascii_letters + string.digits + "_-"
DEFAULT_GOAL_AMOUNT = 1000

SEED_CHARITIES = [
    NewCharity(
        name="Children's Education Fund",
        description="Supporting education for underprivileged children",
        image_url="https://images.unsplash.com/photo-1509062522246-3755977927d7",
        category="Education",
    ),
    NewCharity(
        name="Food for All",
        description="Providing meals to those in need",
        image_url="https://images.unsplash.com/photo-1488521787991-ed7bbaae773c",
        category="Food Security",
    ),
    NewCharity(
        name="Healthcare for All",
        description="Making healthcare accessible to everyone",
        image_url="https://images.unsplash.com/photo-1576091160399-112ba8d25d1d",
        category="Healthcare",
    ),
]


def generate_referral_code(length: int = REFERRAL_CODE_LENGTH) -> str:
    return "".join(secrets.choice(REFERRAL_ALPHABET) for _ in range(length))


class MemStorage:
    """
    Process-lifetime store for users, charities and donations.

    Ids come from per-collection counters starting at 1. Every write runs
    under one lock, so id allocation and the username/referral code
    uniqueness checks cannot interleave between threads. Lookups of a
    missing key return None.
    """

    def __init__(self, session_store: SessionStore | None = None, seed: bool = True):
        self.users: dict[int, User] = {}
        self.charities: dict[int, Charity] = {}
        self.donations: dict[int, Donation] = {}

        self._user_ids = count(1)
        self._charity_ids = count(1)
        self._donation_ids = count(1)

        # key -> user id
        self._users_by_username: dict[str, int] = {}
        self._users_by_referral_code: dict[str, int] = {}

        self._lock = threading.RLock()
        self.session_store = session_store if session_store is not None else SessionStore()

        if seed:
            self._seed_charities()

    def _seed_charities(self):
        for charity in SEED_CHARITIES:
            self.create_charity(charity)
        logger.info(f"Seeded {len(SEED_CHARITIES)} charities.")

    def close(self) -> None:
        self.session_store.clear()

    # Users

    def get_user(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        user_id = self._users_by_username.get(username)
        return self.users.get(user_id) if user_id is not None else None

    def get_user_by_referral_code(self, code: str) -> User | None:
        user_id = self._users_by_referral_code.get(code)
        return self.users.get(user_id) if user_id is not None else None

    def create_user(self, new_user: NewUser) -> User:
        with self._lock:
            if new_user.username in self._users_by_username:
                raise DuplicateUsername(new_user.username)

            referral_code = generate_referral_code()
            while referral_code in self._users_by_referral_code:
                logger.warning("Referral code collision, regenerating.")
                referral_code = generate_referral_code()

            user = User(
                id=next(self._user_ids),
                username=new_user.username,
                password_hash=new_user.password_hash,
                full_name=new_user.full_name,
                referral_code=referral_code,
                goal_amount=DEFAULT_GOAL_AMOUNT,
            )
            self.users[user.id] = user
            self._users_by_username[user.username] = user.id
            self._users_by_referral_code[user.referral_code] = user.id

        logger.info(f"Created user {user.id} with referral code {user.referral_code}.")
        return user

    # Charities

    def get_all_charities(self) -> list[Charity]:
        with self._lock:
            return list(self.charities.values())

    def get_charity(self, charity_id: int) -> Charity | None:
        return self.charities.get(charity_id)

    def create_charity(self, new_charity: NewCharity) -> Charity:
        with self._lock:
            charity = Charity(id=next(self._charity_ids), **new_charity.model_dump())
            self.charities[charity.id] = charity
        return charity

    # Donations

    def create_donation(self, new_donation: NewDonation) -> Donation:
        """Store a donation. Referral code and charity must already be resolved."""
        with self._lock:
            donation = Donation(
                id=next(self._donation_ids),
                created_at=utc_now(),
                **new_donation.model_dump(),
            )
            self.donations[donation.id] = donation

        logger.info(
            f"Recorded donation {donation.id} of {donation.amount} "
            f"for referral code {donation.referral_code}."
        )
        return donation

    def get_donations_by_referral_code(self, code: str) -> list[Donation]:
        with self._lock:
            return [d for d in self.donations.values() if d.referral_code == code]

    def get_total_donations_by_referral_code(self, code: str) -> int:
        return sum(d.amount for d in self.get_donations_by_referral_code(code))
