from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Claims:
    """Identity claims carried inside a signed bearer token."""
    subject_id: str
    email: str
    expires_at: datetime
    issued_at: datetime | None = None
