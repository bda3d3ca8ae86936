from typing import Any, Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Lookups return None when nothing matches and raise StoreError when the
    store itself fails, so callers can tell the two apart.
    """
    def create(self, user: User) -> User:
        """Persist a converted User and return the stored record.

        Raises StoreError on persistence failure, DuplicateError on a unique-key clash.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_phone(self, phone_number: str) -> User | None:
        """Find a user by phone number. Return User or None if not found."""
        ...

    def get_by_username(self, username: str) -> User | None:
        """Find a user by username. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def update(self, user_id: str, fields: dict[str, Any]) -> User | None:
        """Apply field updates and return the updated User, or None if not found."""
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user. Return True if a record was removed."""
        ...
