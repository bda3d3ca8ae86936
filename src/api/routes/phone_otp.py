"""Phone one-time-passcode routes (send code, verify code and log in)."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_otp_verifier, get_request_timeout, get_token_issuer, get_user_repo
from api.errors import run_with_deadline
from api.models import OTPRequest, OTPResponse, VerifyOTPRequest
from port.otp_verifier import OTPVerifier
from port.user_repository import UserRepository
from services import auth_service
from services.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["phone-otp"])


@router.post("/sendotp", response_model=OTPResponse, status_code=status.HTTP_202_ACCEPTED)
async def send_otp(
    request: OTPRequest,
    otp: OTPVerifier = Depends(get_otp_verifier),
    timeout: float = Depends(get_request_timeout),
):
    """Text a one-time code to the given phone number."""
    await run_with_deadline(auth_service.send_phone_otp, request.phone_number, otp=otp, timeout=timeout)
    body = OTPResponse(status=status.HTTP_202_ACCEPTED, message="success", data="OTP sent successfully")
    return JSONResponse(content=body.model_dump(exclude_none=True), status_code=status.HTTP_202_ACCEPTED)


@router.post("/verifyotp", response_model=OTPResponse)
async def verify_otp(
    request: VerifyOTPRequest,
    repo: UserRepository = Depends(get_user_repo),
    issuer: TokenIssuer = Depends(get_token_issuer),
    otp: OTPVerifier = Depends(get_otp_verifier),
    timeout: float = Depends(get_request_timeout),
):
    """Check the submitted code and, if approved, return a JWT token.

    Raises:
        HTTPException: 404 unknown phone, 401 code rejected, 502 provider failure,
            503 when Twilio is not configured (checked before the phone lookup)
    """
    token = await run_with_deadline(
        auth_service.login_phone_otp,
        request.user.phone_number,
        request.code,
        repo=repo,
        issuer=issuer,
        otp=otp,
        timeout=timeout,
    )
    return OTPResponse(status=status.HTTP_200_OK, message="OTP verified successfully", token=token)
