import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class User:
    """Domain model representing a registered user.

    ``password`` holds the bcrypt digest, never the plaintext.
    ``created_at`` is None only for documents stored without a creation time.
    """
    id: str
    name: str
    email: str
    password: str
    created_at: datetime | None
    phone_number: str = ''
    profile_pic: str = ''
    username: str = ''
    user_type: str = ''
    date_of_birth: str = ''
    gender: str = ''

    def to_public(self) -> dict:
        """Return the user fields safe to hand back to a caller (no digest)."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone_number': self.phone_number,
            'profile_pic': self.profile_pic,
            'username': self.username,
            'user_type': self.user_type,
            'date_of_birth': self.date_of_birth,
            'gender': self.gender,
            'created_at': self.created_at,
        }


@dataclass
class Registration:
    """Unvalidated sign-up input carrying the plaintext password."""
    email: str
    password: str = field(repr=False)
    name: str = ''
    phone_number: str = ''
    profile_pic: str = ''
    username: str = ''
    user_type: str = ''
    date_of_birth: str = ''
    gender: str = ''

    def to_user(self, password_hash: str) -> User:
        """Convert to a persistable User.

        Generates the id and creation timestamp; both are set here once
        and never recomputed.
        """
        return User(
            id=str(uuid.uuid4()),
            name=self.name,
            email=self.email,
            password=password_hash,
            created_at=datetime.now(timezone.utc),
            phone_number=self.phone_number,
            profile_pic=self.profile_pic,
            username=self.username,
            user_type=self.user_type,
            date_of_birth=self.date_of_birth,
            gender=self.gender,
        )


@dataclass(frozen=True)
class Credentials:
    """Email/password pair submitted for password login."""
    email: str
    password: str = field(repr=False)
