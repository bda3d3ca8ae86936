from functools import lru_cache

from fastapi import HTTPException

from adapter.external.twilio_verify import TwilioVerifyAdapter
from adapter.mongodb.connection import get_mongodb_client, get_database_name
from adapter.mongodb.question_repository import MongoQuestionRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.otp_verifier import OTPVerifier
from port.question_repository import QuestionRepository
from port.user_repository import UserRepository
from services.password_hasher import BcryptPasswordHasher
from services.token_issuer import TokenIssuer
from utils.config import get_settings


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[get_database_name()]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_question_repo() -> QuestionRepository:
    return MongoQuestionRepository(_get_db())


@lru_cache(maxsize=1)
def get_password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().bcrypt_rounds)


@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    settings = get_settings()
    return TokenIssuer(settings.jwt_secret, validity=settings.token_validity)


@lru_cache(maxsize=1)
def _build_otp_verifier() -> TwilioVerifyAdapter | None:
    settings = get_settings()
    if not settings.twilio_configured:
        return None
    return TwilioVerifyAdapter(
        settings.twilio_account_sid,
        settings.twilio_auth_token,
        settings.twilio_service_sid,
        timeout=settings.request_timeout_seconds,
    )


def get_otp_verifier() -> OTPVerifier:
    """Twilio Verify adapter, raising 503 if Twilio is not configured."""
    verifier = _build_otp_verifier()
    if verifier is None:
        raise HTTPException(status_code=503, detail="OTP service unavailable")
    return verifier


def get_request_timeout() -> float:
    return get_settings().request_timeout_seconds
