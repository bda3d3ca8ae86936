"""MongoDB implementation of UserRepository."""

from logging import getLogger
from datetime import datetime, timezone
from typing import Any

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, StoreError
from domain.model.user import User

logger = getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    """BSON dates are UTC; attach the zone when the client returns naive values."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Domain attribute -> document key. Keys match the documents already stored
# in the users collection.
_FIELD_MAP = {
    'name': 'name',
    'email': 'email',
    'password': 'password',
    'phone_number': 'phonenumber',
    'profile_pic': 'profilepic',
    'username': 'username',
    'user_type': 'usertype',
    'date_of_birth': 'dateofbirth',
    'gender': 'gender',
    'created_at': 'createdat',
}

_IMMUTABLE_FIELDS = {'id', 'created_at'}


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        non_empty = {'$type': 'string', '$gt': ''}
        try:
            results = [
                create_index_safe(
                    self.collection, [('email', 1)], 'idx_users_email',
                    unique=True, partialFilterExpression={'email': non_empty},
                ),
                create_index_safe(
                    self.collection, [('username', 1)], 'idx_users_username',
                    unique=True, partialFilterExpression={'username': non_empty},
                ),
                create_index_safe(self.collection, [('phonenumber', 1)], 'idx_users_phone'),
                create_index_safe(self.collection, [('createdat', -1)], 'idx_users_created_at'),
            ]
            return all(results)
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=str(doc['_id']),
            name=doc.get('name', ''),
            email=doc.get('email', ''),
            password=doc.get('password', ''),
            created_at=_as_utc(doc.get('createdat')),
            phone_number=doc.get('phonenumber', ''),
            profile_pic=doc.get('profilepic', ''),
            username=doc.get('username', ''),
            user_type=doc.get('usertype', ''),
            date_of_birth=doc.get('dateofbirth', ''),
            gender=doc.get('gender', ''),
        )

    def _to_document(self, user: User) -> dict:
        doc = {'_id': user.id}
        for attr, key in _FIELD_MAP.items():
            doc[key] = getattr(user, attr)
        return doc

    def _find_one(self, key: str, value: str, log_context: dict) -> User | None:
        if not value:
            return None
        try:
            doc = self.collection.find_one({key: value})
        except PyMongoError as e:
            logger.error("User lookup failed", extra={**log_context, "error": str(e)})
            raise StoreError("User store unavailable") from e
        if doc is None:
            return None
        return self._to_domain(doc)

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> User:
        """Insert a converted User and return it."""
        try:
            self.collection.insert_one(self._to_document(user))
        except DuplicateKeyError as e:
            logger.warning("User creation failed: duplicate key", extra={"email": user.email})
            raise DuplicateError("User already exists") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": user.email, "error": str(e)})
            raise StoreError("Failed to create user") from e

        logger.info("User created", extra={"userId": user.id, "email": user.email})
        return user

    def update(self, user_id: str, fields: dict[str, Any]) -> User | None:
        """Apply field updates. id and created_at are never changed."""
        unknown = set(fields) - set(_FIELD_MAP) - _IMMUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown user fields: {sorted(unknown)}")

        changes = {
            _FIELD_MAP[attr]: value
            for attr, value in fields.items()
            if attr not in _IMMUTABLE_FIELDS
        }
        if not changes:
            return self.get_by_id(user_id)

        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            raise DuplicateError("User already exists") from e
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to update user") from e

        if doc is None:
            return None
        logger.debug("User updated", extra={"userId": user_id, "fields": sorted(changes)})
        return self._to_domain(doc)

    def delete(self, user_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to delete user") from e
        return result.deleted_count == 1

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        return self._find_one('email', email, {"email": email})

    def get_by_phone(self, phone_number: str) -> User | None:
        return self._find_one('phonenumber', phone_number, {"phone": phone_number})

    def get_by_username(self, username: str) -> User | None:
        return self._find_one('username', username, {"username": username})

    def get_by_id(self, user_id: str) -> User | None:
        return self._find_one('_id', user_id, {"userId": user_id})
