# Standard library imports
import logging
from typing import Any, Dict, List, Optional

# External package imports
from motor.motor_asyncio import AsyncIOMotorCollection
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

# Local application imports
from ...domain.repositories.user_repository import UserRepository
from ...domain.models.user import User
from ...domain.constants import UserFields
from ...domain.exceptions import DuplicateEmailError
from ...utils.datetime_utils import ensure_utc, utc_now
from .mongo_connection import get_user_collection

logger = logging.getLogger(__name__)

# Smallest BSON Date increment
TIMESTAMP_STEP_MS = 1


class MongoUserRepository(UserRepository):
    """MongoDB implementation of UserRepository"""

    def __init__(self, user_collection: Optional[AsyncIOMotorCollection] = None) -> None:
        self.user_collection = user_collection if user_collection is not None else get_user_collection()
        self._indexes_ready = False

    def is_valid_reference(self, user_id: str) -> bool:
        """A reference is valid when it is a 24-character hex ObjectId string"""
        return isinstance(user_id, str) and ObjectId.is_valid(user_id)

    async def ensure_indexes(self) -> None:
        """Create the unique email index and the listing index"""
        await self.user_collection.create_index([(UserFields.EMAIL, ASCENDING)], unique=True)
        await self.user_collection.create_index([(UserFields.CREATED_AT, DESCENDING)])
        self._indexes_ready = True

    async def _require_indexes(self) -> None:
        """
        Writes depend on the unique email index. Until it has been created
        successfully every write retries it, so a database that was down at
        startup never accepts unchecked duplicates once it comes back.
        """
        if self._indexes_ready:
            return
        try:
            await self.ensure_indexes()
        except PyMongoError as e:
            raise RuntimeError(f"Error preparing users collection: {str(e)}")
        logger.info("User indexes ensured")

    async def create(self, user: User) -> User:
        """
        Insert a new user

        Args:
            user: User domain model without id or timestamps

        Returns:
            Stored User with id, created_at and updated_at set

        Raises:
            DuplicateEmailError: If the email is already taken
            RuntimeError: On any other database failure
        """
        await self._require_indexes()

        now = utc_now()
        document = self._user_to_dict(user)
        document[UserFields.CREATED_AT] = now
        document[UserFields.UPDATED_AT] = now

        try:
            result = await self.user_collection.insert_one(document)
        except DuplicateKeyError:
            raise DuplicateEmailError(user.email)
        except PyMongoError as e:
            raise RuntimeError(f"Error creating user: {str(e)}")

        document[UserFields.MONGO_ID] = result.inserted_id
        return self._document_to_user(document)

    async def find_all(self) -> List[User]:
        """
        List all users, newest first

        Returns:
            Users sorted by creation time descending
        """
        try:
            cursor = self.user_collection.find({}).sort(
                [(UserFields.CREATED_AT, DESCENDING), (UserFields.MONGO_ID, DESCENDING)]
            )
            users = []
            async for document in cursor:
                users.append(self._document_to_user(document))
            return users
        except PyMongoError as e:
            raise RuntimeError(f"Error listing users: {str(e)}")

    async def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Find user by ID

        Args:
            user_id: User ID to search for

        Returns:
            User domain model if found, None otherwise
        """
        if not self.is_valid_reference(user_id):
            return None

        try:
            document = await self.user_collection.find_one({UserFields.MONGO_ID: ObjectId(user_id)})
        except PyMongoError as e:
            raise RuntimeError(f"Error finding user by ID: {str(e)}")

        if document is None:
            return None
        return self._document_to_user(document)

    async def update_by_id(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        """
        Apply a partial update

        Args:
            user_id: User ID to update
            changes: Normalized field values; a None value removes the field

        Returns:
            The post-update User, or None if no user has this ID

        Raises:
            DuplicateEmailError: If the new email is already taken
            RuntimeError: On any other database failure
        """
        if not self.is_valid_reference(user_id):
            return None

        await self._require_indexes()

        # Pipeline update: $literal stores values verbatim; updatedAt moves
        # strictly past its previous value.
        to_set: Dict[str, Any] = {
            k: {"$literal": v} for k, v in changes.items() if v is not None and k in UserFields.WRITABLE
        }
        to_set[UserFields.UPDATED_AT] = {
            "$max": [utc_now(), {"$add": [f"${UserFields.UPDATED_AT}", TIMESTAMP_STEP_MS]}]
        }
        to_unset = [k for k, v in changes.items() if v is None and k in UserFields.WRITABLE]

        update: List[Dict[str, Any]] = [{"$set": to_set}]
        if to_unset:
            update.append({"$unset": to_unset})

        try:
            document = await self.user_collection.find_one_and_update(
                {UserFields.MONGO_ID: ObjectId(user_id)},
                update,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise DuplicateEmailError(changes.get(UserFields.EMAIL) or "")
        except PyMongoError as e:
            raise RuntimeError(f"Error updating user: {str(e)}")

        if document is None:
            return None
        return self._document_to_user(document)

    async def delete_by_id(self, user_id: str) -> Optional[User]:
        """
        Delete a user permanently

        Args:
            user_id: User ID to delete

        Returns:
            The deleted User's last snapshot, or None if no user has this ID
        """
        if not self.is_valid_reference(user_id):
            return None

        try:
            document = await self.user_collection.find_one_and_delete(
                {UserFields.MONGO_ID: ObjectId(user_id)}
            )
        except PyMongoError as e:
            raise RuntimeError(f"Error deleting user: {str(e)}")

        if document is None:
            return None
        return self._document_to_user(document)

    def _document_to_user(self, document: Dict[str, Any]) -> User:
        """
        Convert MongoDB document to User domain model

        Args:
            document: MongoDB document dictionary

        Returns:
            User domain model
        """
        if not document or UserFields.MONGO_ID not in document:
            raise ValueError("Invalid document: missing _id field")

        return User(
            id=str(document[UserFields.MONGO_ID]),
            name=document.get(UserFields.NAME, ""),
            email=document.get(UserFields.EMAIL, ""),
            age=document.get(UserFields.AGE),
            address=document.get(UserFields.ADDRESS),
            created_at=ensure_utc(document.get(UserFields.CREATED_AT)),
            updated_at=ensure_utc(document.get(UserFields.UPDATED_AT)),
        )

    def _user_to_dict(self, user: User) -> Dict[str, Any]:
        """
        Convert User domain model to MongoDB document

        Optional fields left unset are omitted rather than stored as null.
        """
        user_dict: Dict[str, Any] = {
            UserFields.NAME: user.name,
            UserFields.EMAIL: user.email,
        }
        if user.age is not None:
            user_dict[UserFields.AGE] = user.age
        if user.address is not None:
            user_dict[UserFields.ADDRESS] = user.address

        return user_dict
