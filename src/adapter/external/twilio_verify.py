"""Twilio Verify adapter.

Implements OTPVerifier using the Twilio Verify v2 API: one call starts an SMS
verification, a second call checks the submitted code.

API Documentation: https://www.twilio.com/docs/verify/api
"""

import logging

from requests.exceptions import RequestException, Timeout
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from port.otp_verifier import OTPAdapterError, OTPTimeoutError

logger = logging.getLogger(__name__)

OTP_CHANNEL = "sms"
APPROVED_STATUS = "approved"
API_TIMEOUT_SECONDS = 10.0

# Verify answers 404 when no pending verification exists (expired, already
# approved or never sent) and 429 once the attempt limit is reached. Both mean
# the submitted code cannot be approved.
REJECTED_CHECK_STATUSES = (404, 429)


class TwilioVerifyAdapter:
    """Adapter that sends and checks one-time codes through Twilio Verify."""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        service_sid: str,
        timeout: float = API_TIMEOUT_SECONDS,
        client: Client | None = None,
    ):
        if not (account_sid and auth_token and service_sid):
            raise ValueError("Twilio account SID, auth token and Verify service SID are required")
        self.service_sid = service_sid
        self._client = client or Client(
            account_sid,
            auth_token,
            http_client=TwilioHttpClient(timeout=timeout),
        )

    def _service(self):
        return self._client.verify.v2.services(self.service_sid)

    def send_code(self, phone_number: str) -> None:
        try:
            verification = self._service().verifications.create(to=phone_number, channel=OTP_CHANNEL)
        except Timeout as e:
            logger.warning("Twilio send timed out", extra={"phone": phone_number})
            raise OTPTimeoutError("OTP provider timed out") from e
        except (TwilioException, RequestException) as e:
            logger.error("Twilio send failed", extra={"phone": phone_number, "error": str(e)})
            raise OTPAdapterError(f"Failed to send OTP: {e}") from e

        logger.info("OTP sent", extra={"phone": phone_number, "status": verification.status})

    def check_code(self, phone_number: str, code: str) -> bool:
        try:
            check = self._service().verification_checks.create(to=phone_number, code=code)
        except Timeout as e:
            logger.warning("Twilio check timed out", extra={"phone": phone_number})
            raise OTPTimeoutError("OTP provider timed out") from e
        except TwilioRestException as e:
            if e.status not in REJECTED_CHECK_STATUSES:
                logger.error("Twilio check failed", extra={"phone": phone_number, "error": str(e)})
                raise OTPAdapterError(f"Failed to verify OTP: {e}") from e
            logger.info(
                "OTP check rejected by provider",
                extra={"phone": phone_number, "status": e.status, "twilioCode": e.code},
            )
            return False
        except (TwilioException, RequestException) as e:
            logger.error("Twilio check failed", extra={"phone": phone_number, "error": str(e)})
            raise OTPAdapterError(f"Failed to verify OTP: {e}") from e

        approved = check.status == APPROVED_STATUS
        logger.info("OTP checked", extra={"phone": phone_number, "approved": approved})
        return approved
