import logging

from fundraiser.core.exceptions import DuplicateUsername, InvalidCredentials
from fundraiser.core.security import hash_password, verify_password
from fundraiser.data_access.memory import MemStorage
from fundraiser.models.donation import NewUser, User

logger = logging.getLogger(__name__)


class AuthService:
    """
    Binds and unbinds a user to a session token.

    A session is either anonymous (no token, or a token the session store
    no longer knows) or authenticated to exactly one user id.
    """

    def __init__(self, storage: MemStorage):
        self.storage = storage
        self.sessions = storage.session_store

    def register(
        self,
        username: str,
        password: str,
        full_name: str,
        current_token: str | None = None
    ) -> tuple[User, str]:
        if self.storage.get_user_by_username(username):
            raise DuplicateUsername(username)

        # Hash outside the store lock; create_user re-checks the username
        user = self.storage.create_user(
            NewUser(
                username=username,
                password_hash=hash_password(password),
                full_name=full_name,
            )
        )
        token = self._rebind(current_token, user.id)
        logger.info(f"Registered user {user.id}.")
        return user, token

    def login(
        self,
        username: str,
        password: str,
        current_token: str | None = None
    ) -> tuple[User, str]:
        user = self.storage.get_user_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected login attempt.")
            raise InvalidCredentials()

        token = self._rebind(current_token, user.id)
        logger.info(f"User {user.id} logged in.")
        return user, token

    def _rebind(self, current_token: str | None, user_id: int) -> str:
        # A login always starts a new session; the previous token stops resolving
        self.sessions.destroy(current_token)
        return self.sessions.create(user_id)

    def logout(self, token: str | None) -> None:
        self.sessions.destroy(token)

    def current_user(self, token: str | None) -> User | None:
        user_id = self.sessions.get(token)
        if user_id is None:
            return None
        return self.storage.get_user(user_id)
