from typing import Protocol
from domain.model.question import Question


class QuestionRepository(Protocol):
    """Protocol defining read access to the question catalog."""
    def list_all(self) -> list[Question]:
        ...

    def get_by_id(self, question_id: str) -> Question | None:
        """Find a question by ID. Return None if not found or the ID is malformed."""
        ...
