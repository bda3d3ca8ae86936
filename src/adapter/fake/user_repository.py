"""In-memory implementation of UserRepository for testing."""

from dataclasses import replace
from typing import Any

from domain.model.errors import DuplicateError, StoreError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self.fail_with: StoreError | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> User:
        self._check()
        if user.id in self.store:
            raise DuplicateError("User id already exists")
        if user.email and any(u.email == user.email for u in self.store.values()):
            raise DuplicateError("Email already registered")

        self.store[user.id] = replace(user)
        return replace(user)

    def update(self, user_id: str, fields: dict[str, Any]) -> User | None:
        self._check()
        user = self.store.get(user_id)
        if not user:
            return None

        fields = {k: v for k, v in fields.items() if k not in ('id', 'created_at')}
        updated = replace(user, **fields)
        self.store[user_id] = updated
        return replace(updated)

    def delete(self, user_id: str) -> bool:
        self._check()
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def _find(self, attr: str, value: str) -> User | None:
        self._check()
        if not value:
            return None
        for user in self.store.values():
            if getattr(user, attr) == value:
                return replace(user)
        return None

    def get_by_email(self, email: str) -> User | None:
        return self._find('email', email)

    def get_by_phone(self, phone_number: str) -> User | None:
        return self._find('phone_number', phone_number)

    def get_by_username(self, username: str) -> User | None:
        return self._find('username', username)

    def get_by_id(self, user_id: str) -> User | None:
        return self._find('id', user_id)
