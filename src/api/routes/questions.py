"""Question catalog routes (read-only, bearer token required)."""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_question_repo
from api.errors import to_http_exception
from api.models import QuestionResponse
from api.security import get_current_claims
from domain.model.errors import StoreError
from port.question_repository import QuestionRepository

router = APIRouter(prefix="/api/all", tags=["questions"], dependencies=[Depends(get_current_claims)])


@router.get("/allquestions", response_model=list[QuestionResponse])
async def list_questions(repo: QuestionRepository = Depends(get_question_repo)):
    """List every question in the catalog."""
    try:
        questions = repo.list_all()
    except StoreError as e:
        raise to_http_exception(e) from e
    return [QuestionResponse.from_domain(q) for q in questions]


@router.get("/question/{question_id}", response_model=QuestionResponse)
async def get_question(question_id: str, repo: QuestionRepository = Depends(get_question_repo)):
    """Get one question by its ID."""
    try:
        question = repo.get_by_id(question_id)
    except StoreError as e:
        raise to_http_exception(e) from e
    if question is None:
        raise HTTPException(status_code=404, detail="Question not found")
    return QuestionResponse.from_domain(question)
