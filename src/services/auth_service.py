"""Auth service: registration and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
Every flow runs its steps in order and stops at the first failure.
"""

import logging

from domain.model.errors import (
    AlreadyExistsError,
    InvalidCredentialsError,
    NotFoundError,
    OTPRejectedError,
    SigningError,
)
from domain.model.user import Credentials, Registration, User
from port.otp_verifier import OTPVerifier
from port.user_repository import UserRepository
from services.password_hasher import BcryptPasswordHasher
from services.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)


def sign_up(
    registration: Registration,
    *,
    repo: UserRepository,
    hasher: BcryptPasswordHasher,
    issuer: TokenIssuer,
) -> str:
    """Register a new user and return a token for it.

    Raises:
        AlreadyExistsError: email already registered
        StoreError: lookup or insert failed
        HashingError: password could not be hashed
        SigningError: user was stored but the token could not be signed
    """
    existing = repo.get_by_email(registration.email)
    if existing is not None and existing.email == registration.email:
        raise AlreadyExistsError("User with this email already exists")

    password_hash = hasher.hash(registration.password)
    user = repo.create(registration.to_user(password_hash))

    try:
        token = issuer.issue(user.id, user.email)
    except SigningError:
        # No rollback: the stored user can log in once signing works again
        logger.error("User created but token issuance failed", extra={"userId": user.id})
        raise

    logger.info("User registered", extra={"userId": user.id, "email": user.email})
    return token


def login(
    credentials: Credentials,
    *,
    repo: UserRepository,
    hasher: BcryptPasswordHasher,
    issuer: TokenIssuer,
) -> str:
    """Authenticate by email and password and return a token.

    Unknown email and wrong password raise the same error.

    Raises:
        InvalidCredentialsError: no such user or password mismatch
        StoreError: lookup failed
    """
    user = repo.get_by_email(credentials.email)
    if user is None or not hasher.verify(user.password, credentials.password):
        raise InvalidCredentialsError()

    token = issuer.issue(user.id, user.email)
    logger.info("User logged in", extra={"userId": user.id, "email": user.email})
    return token


def send_phone_otp(phone_number: str, *, otp: OTPVerifier) -> None:
    """Ask the OTP provider to text a code to ``phone_number``."""
    otp.send_code(phone_number)


def login_phone_otp(
    phone_number: str,
    code: str,
    *,
    repo: UserRepository,
    issuer: TokenIssuer,
    otp: OTPVerifier,
) -> str:
    """Authenticate by phone number and one-time code and return a token.

    The token is issued only after the provider approves the code.

    Raises:
        NotFoundError: no user has this phone number (provider is not contacted)
        OTPRejectedError: provider did not approve the code
        OTPAdapterError: provider call failed
        StoreError: lookup failed
    """
    user = repo.get_by_phone(phone_number)
    if user is None:
        raise NotFoundError("User not found")

    if not otp.check_code(phone_number, code):
        logger.info("OTP rejected", extra={"userId": user.id, "phone": phone_number})
        raise OTPRejectedError("Invalid or expired verification code")

    token = issuer.issue(user.id, user.email)
    logger.info("User logged in with OTP", extra={"userId": user.id, "phone": phone_number})
    return token


def get_user(user_id: str, *, repo: UserRepository) -> User:
    """Fetch a user by id.

    Raises:
        NotFoundError: no such user
    """
    user = repo.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
