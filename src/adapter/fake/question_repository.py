"""In-memory implementation of QuestionRepository for testing."""

from domain.model.question import Question


class FakeQuestionRepository:
    def __init__(self, questions: list[Question] | None = None):
        self.store: dict[str, Question] = {q.id: q for q in questions or []}

    def list_all(self) -> list[Question]:
        return list(self.store.values())

    def get_by_id(self, question_id: str) -> Question | None:
        return self.store.get(question_id)
