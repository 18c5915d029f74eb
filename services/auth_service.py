"""
Authentication service: user registration, password checks and bearer tokens.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

import bcrypt
from jose import JWTError, jwt

from core.config import Settings
from core.logger import logger
from domain.entities import User
from domain.errors import AuthenticationError, ConflictError, NotFoundError
from ports.repository import UserRepositoryPort


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt (input truncated to bcrypt's 72 byte limit)."""
    password_bytes = password.encode("utf-8")[:72]
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a plain password against its bcrypt hash."""
    if not hashed_password:
        return False
    return bcrypt.checkpw(password.encode("utf-8")[:72], hashed_password.encode("utf-8"))


class IAuthService(ABC):
    """Interface for authentication operations."""

    @abstractmethod
    async def register(
        self, email: str, username: str, password: str, first_name: str, last_name: str
    ) -> User:
        pass

    @abstractmethod
    async def login(self, username: str, password: str) -> Tuple[User, str]:
        pass

    @abstractmethod
    async def verify_token(self, token: str) -> str:
        pass

    @abstractmethod
    async def get_profile(self, user_id: str) -> User:
        pass

    @abstractmethod
    async def list_users(self) -> List[User]:
        pass


class AuthService(IAuthService):
    """Credential store backed by the user repository."""

    def __init__(self, users: UserRepositoryPort, settings: Settings):
        self.users = users
        self.settings = settings

    async def register(
        self, email: str, username: str, password: str, first_name: str, last_name: str
    ) -> User:
        """
        Register a new user.

        Raises:
            ConflictError: If the email or username is already taken
        """
        logger.info(f"Registering user: username={username}")

        if await self.users.find_by_email_or_username(email, username):
            logger.warning(f"Registration rejected, user exists: username={username}")
            raise ConflictError("User with this email or username already exists")

        user = await self.users.create(
            {
                "email": email,
                "username": username,
                "password": hash_password(password, self.settings.bcrypt_rounds),
                "first_name": first_name,
                "last_name": last_name,
            }
        )

        logger.info(f"User registered: id={user.id}")
        return user

    async def authenticate(self, username: str, password: str) -> User:
        user = await self.users.find_by_username(username)
        if user is None or not verify_password(password, user.password):
            logger.warning(f"Invalid credentials for username={username}")
            raise AuthenticationError("Invalid credentials")
        return user

    async def login(self, username: str, password: str) -> Tuple[User, str]:
        """
        Authenticate and issue an access token.

        Returns:
            Tuple[User, str]: The user and a signed JWT
        """
        user = await self.authenticate(username, password)
        token = self.create_access_token(user)
        logger.info(f"User logged in: id={user.id}")
        return user, token

    def create_access_token(self, user: User, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.utcnow() + (
            expires_delta or timedelta(minutes=self.settings.jwt_expires_minutes)
        )
        payload = {
            "sub": user.id,
            "username": user.username,
            "email": user.email,
            "exp": expire,
        }
        return jwt.encode(payload, self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm)

    async def verify_token(self, token: str) -> str:
        """
        Resolve a bearer token to the caller id.

        Raises:
            AuthenticationError: If the token is invalid, expired or its user is gone
        """
        try:
            payload = jwt.decode(
                token, self.settings.jwt_secret, algorithms=[self.settings.jwt_algorithm]
            )
        except JWTError as e:
            logger.warning(f"Token rejected: {e}")
            raise AuthenticationError("Could not validate credentials")

        user_id = payload.get("sub")
        if not user_id or await self.users.find_by_id(user_id) is None:
            logger.warning("Token subject does not resolve to a user")
            raise AuthenticationError("Could not validate credentials")

        return user_id

    async def get_profile(self, user_id: str) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def list_users(self) -> List[User]:
        return await self.users.list_all()
