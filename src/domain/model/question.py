from dataclasses import dataclass


@dataclass(frozen=True)
class Question:
    """Practice question entry from the read-only catalog."""
    id: str
    name: str
    category: str = ''
    level: str = ''
    link: str = ''
    video_url: str = ''
    number: int = 0
