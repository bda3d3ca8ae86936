"""In-memory implementation of OTPVerifier for testing."""

from port.otp_verifier import OTPAdapterError


class FakeOTPVerifier:
    """Fake OTP adapter that approves one preconfigured code."""

    def __init__(self, approved_code: str = "123456", error: OTPAdapterError | None = None):
        self.approved_code = approved_code
        self.error = error
        self.sent: list[str] = []
        self.checks: list[tuple[str, str]] = []

    def send_code(self, phone_number: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(phone_number)

    def check_code(self, phone_number: str, code: str) -> bool:
        self.checks.append((phone_number, code))
        if self.error is not None:
            raise self.error
        return code == self.approved_code

    @property
    def contacted(self) -> bool:
        return bool(self.sent or self.checks)
