"""
User Store Module

This module persists user accounts in MongoDB using pymongo's asyncio API.

Design Decisions:
- Passwords are stored as salted PBKDF2-SHA256 hashes, never in plain text
- Hash comparison uses constant-time comparison
- Hashing runs in a worker thread so it never stalls the event loop
- Email is the unique login key, enforced by a unique index
- Password hashes never leave this module
"""

import asyncio
import hashlib
import hmac
import secrets
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from app.config import get_settings
from app.logging_config import get_logger
from app.models import SignupRequest, UserPublic

logger = get_logger(__name__)

USERS_COLLECTION = "users"

PASSWORD_HASH_ALGORITHM = "pbkdf2_sha256"
PASSWORD_HASH_ITERATIONS = 600_000


class UserStoreError(Exception):
    """Base exception for user store errors."""
    pass


class UserAlreadyExistsError(UserStoreError):
    """An account with this email already exists."""
    pass


class InvalidCredentialsError(UserStoreError):
    """Unknown email or wrong password."""
    pass


class UserNotFoundError(UserStoreError):
    """No account with this id."""
    pass


# =============================================================================
# Password Hashing
# =============================================================================

def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """
    Hash a password for storage.

    Returns:
        String of the form ``pbkdf2_sha256$<iterations>$<salt>$<hash>``
    """
    iterations = iterations or PASSWORD_HASH_ITERATIONS
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations
    )
    return f"{PASSWORD_HASH_ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a password against a value produced by hash_password."""
    try:
        algorithm, iterations, salt, expected = stored_hash.split("$", 3)
        rounds = int(iterations)
    except ValueError:
        return False

    if algorithm != PASSWORD_HASH_ALGORITHM:
        return False

    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), rounds
    )
    return hmac.compare_digest(digest.hex(), expected)


# =============================================================================
# Repository
# =============================================================================

class UserRepository:
    """
    MongoDB-backed store of user accounts.

    Usage:
        repository = UserRepository(client[settings.mongo_database])
        user = await repository.create_user(signup)
    """

    def __init__(self, database: AsyncDatabase):
        self.database = database
        self.collection = database[USERS_COLLECTION]

    async def ensure_indexes(self) -> None:
        """Create the unique email index."""
        await self.collection.create_index("email", unique=True)
        logger.info("User indexes ensured", collection=USERS_COLLECTION)

    async def ping(self) -> None:
        """Check that the database answers."""
        await self.database.command("ping")

    async def create_user(self, signup: SignupRequest) -> UserPublic:
        """
        Create an account.

        Raises:
            UserAlreadyExistsError: If the email is taken
        """
        if await self.collection.find_one({"email": signup.email}):
            raise UserAlreadyExistsError(signup.email)

        document = {
            "username": signup.username,
            "email": signup.email,
            "password_hash": await asyncio.to_thread(hash_password, signup.password),
            "is_admin": False,
        }

        try:
            inserted = await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise UserAlreadyExistsError(signup.email) from e

        logger.info("User created", user_id=str(inserted.inserted_id))
        document["_id"] = inserted.inserted_id
        return _to_public(document)

    async def authenticate(self, email: str, password: str) -> UserPublic:
        """
        Check credentials.

        Raises:
            InvalidCredentialsError: On unknown email or wrong password
        """
        document = await self.collection.find_one({"email": email})
        if not document or not await asyncio.to_thread(
            verify_password, password, document.get("password_hash", "")
        ):
            logger.info("Login rejected")
            raise InvalidCredentialsError()
        return _to_public(document)

    async def list_users(self) -> List[UserPublic]:
        """Get every account, without password hashes."""
        cursor = self.collection.find({}, {"password_hash": 0})
        documents = await cursor.to_list(length=None)
        return [_to_public(document) for document in documents]

    async def delete_user(self, user_id: str) -> None:
        """
        Delete an account by id.

        Raises:
            UserNotFoundError: If the id is malformed or unknown
        """
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError) as e:
            raise UserNotFoundError(user_id) from e

        result = await self.collection.delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise UserNotFoundError(user_id)

        logger.info("User deleted", user_id=user_id)


def _to_public(document: Dict[str, Any]) -> UserPublic:
    return UserPublic(
        id=str(document["_id"]),
        username=document["username"],
        email=document["email"],
        is_admin=bool(document.get("is_admin", False)),
    )


def create_mongo_client(uri: Optional[str] = None) -> AsyncMongoClient:
    """Create a MongoDB client from settings. Connection happens lazily."""
    settings = get_settings()
    return AsyncMongoClient(
        uri or settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
    )
