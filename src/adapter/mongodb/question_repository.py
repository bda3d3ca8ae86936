"""MongoDB implementation of QuestionRepository."""

from logging import getLogger

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import QUESTIONS_COLLECTION_NAME
from domain.model.errors import StoreError
from domain.model.question import Question

logger = getLogger(__name__)


def _question_number(value) -> int:
    """Sheet imports store Id as int or string; anything else counts as unnumbered."""
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


class MongoQuestionRepository:
    def __init__(self, db: Database):
        self.collection = db[QUESTIONS_COLLECTION_NAME]

    def _to_domain(self, doc: dict) -> Question:
        """Convert a catalog document. Keys follow the imported question sheet."""
        return Question(
            id=str(doc['_id']),
            name=doc.get('Name', ''),
            category=doc.get('Category', ''),
            level=doc.get('Level', ''),
            link=doc.get('Link', ''),
            video_url=doc.get('videourl', ''),
            number=_question_number(doc.get('Id')),
        )

    def list_all(self) -> list[Question]:
        try:
            return [self._to_domain(doc) for doc in self.collection.find({})]
        except PyMongoError as e:
            logger.error("Failed to list questions", extra={"error": str(e)})
            raise StoreError("Question store unavailable") from e

    def get_by_id(self, question_id: str) -> Question | None:
        try:
            oid = ObjectId(question_id)
        except (InvalidId, TypeError):
            return None

        try:
            doc = self.collection.find_one({'_id': oid})
        except PyMongoError as e:
            logger.error("Failed to get question", extra={"questionId": question_id, "error": str(e)})
            raise StoreError("Question store unavailable") from e
        return self._to_domain(doc) if doc else None
