"""OTP port: outbound interface for one-time-passcode delivery and checks."""

from typing import Protocol


class OTPAdapterError(Exception):
    """Base exception for OTP provider errors."""


class OTPTimeoutError(OTPAdapterError):
    """OTP provider did not answer in time."""


class OTPVerifier(Protocol):
    """Port for sending a one-time code to a phone and checking it.

    The provider's verification-session identifier stays inside the adapter.
    """

    def send_code(self, phone_number: str) -> None:
        """Ask the provider to deliver a code. Raises OTPAdapterError on failure."""
        ...

    def check_code(self, phone_number: str, code: str) -> bool:
        """Return True if the provider approved the code for this phone."""
        ...
