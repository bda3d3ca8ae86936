"""Unit tests for auth_service — sign-up, password login and phone OTP login."""

import unittest
from unittest.mock import patch

from adapter.fake.otp_verifier import FakeOTPVerifier
from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import (
    AlreadyExistsError,
    InvalidCredentialsError,
    NotFoundError,
    OTPRejectedError,
    SigningError,
    StoreError,
)
from domain.model.user import Credentials, Registration
from port.otp_verifier import OTPAdapterError
from services.auth_service import (
    get_user,
    login,
    login_phone_otp,
    send_phone_otp,
    sign_up,
)
from services.password_hasher import BcryptPasswordHasher
from services.token_issuer import TokenIssuer

PHONE = '+15550001111'


class AuthServiceTestCase(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.hasher = BcryptPasswordHasher(rounds=4)
        self.issuer = TokenIssuer('test-secret')
        self.otp = FakeOTPVerifier(approved_code='123456')

    def register(self, email='a@x.com', password='p1', phone_number=PHONE) -> str:
        return sign_up(
            Registration(email=email, password=password, name='Ada', phone_number=phone_number),
            repo=self.repo,
            hasher=self.hasher,
            issuer=self.issuer,
        )


class TestSignUp(AuthServiceTestCase):

    def test_returns_token_and_stores_digest(self):
        token = self.register()

        self.assertTrue(token)
        stored = self.repo.get_by_email('a@x.com')
        self.assertIsNotNone(stored)
        self.assertNotEqual(stored.password, 'p1')
        self.assertTrue(self.hasher.verify(stored.password, 'p1'))

    def test_token_is_bound_to_new_user(self):
        token = self.register()

        claims = self.issuer.decode(token)
        stored = self.repo.get_by_email('a@x.com')
        self.assertEqual(claims.subject_id, stored.id)
        self.assertEqual(claims.email, 'a@x.com')

    def test_duplicate_email_raises_already_exists(self):
        self.register()
        original = self.repo.get_by_email('a@x.com')

        with self.assertRaises(AlreadyExistsError):
            self.register(password='other', phone_number='+15559999999')

        self.assertEqual(self.repo.get_by_email('a@x.com'), original)
        self.assertEqual(len(self.repo.store), 1)

    def test_lookup_store_error_aborts_before_hashing(self):
        self.repo.fail_with = StoreError('down')

        with patch.object(self.hasher, 'hash') as mock_hash:
            with self.assertRaises(StoreError):
                self.register()
            mock_hash.assert_not_called()

        self.repo.fail_with = None
        self.assertEqual(self.repo.store, {})

    def test_empty_email_lookup_counts_as_not_found(self):
        token = self.register(email='')

        self.assertTrue(token)
        self.assertEqual(len(self.repo.store), 1)

    def test_create_failure_issues_no_token(self):
        with patch.object(self.repo, 'create', side_effect=StoreError('insert failed')):
            with patch.object(self.issuer, 'issue') as mock_issue:
                with self.assertRaises(StoreError):
                    self.register()
                mock_issue.assert_not_called()

    def test_signing_failure_after_create_keeps_user(self):
        with patch.object(self.issuer, 'issue', side_effect=SigningError('no key')):
            with self.assertRaises(SigningError):
                self.register()

        self.assertIsNotNone(self.repo.get_by_email('a@x.com'))

    def test_scenario_register_twice(self):
        self.assertTrue(self.register(email='a@x.com', password='p1'))
        with self.assertRaises(AlreadyExistsError):
            self.register(email='a@x.com', password='p1')


class TestLogin(AuthServiceTestCase):

    def setUp(self):
        super().setUp()
        self.register()

    def login(self, email='a@x.com', password='p1') -> str:
        return login(
            Credentials(email=email, password=password),
            repo=self.repo,
            hasher=self.hasher,
            issuer=self.issuer,
        )

    def test_success_token_carries_email(self):
        claims = self.issuer.decode(self.login())

        self.assertEqual(claims.email, 'a@x.com')
        self.assertEqual(claims.subject_id, self.repo.get_by_email('a@x.com').id)

    def test_wrong_password_raises_invalid_credentials(self):
        with patch.object(self.issuer, 'issue') as mock_issue:
            with self.assertRaises(InvalidCredentialsError):
                self.login(password='wrong')
            mock_issue.assert_not_called()

    def test_unknown_email_is_indistinguishable_from_wrong_password(self):
        with self.assertRaises(InvalidCredentialsError) as unknown:
            self.login(email='nobody@x.com')
        with self.assertRaises(InvalidCredentialsError) as wrong:
            self.login(password='wrong')

        self.assertEqual(str(unknown.exception), str(wrong.exception))

    def test_store_error_propagates(self):
        self.repo.fail_with = StoreError('down')
        with self.assertRaises(StoreError):
            self.login()


class TestPhoneOtp(AuthServiceTestCase):

    def setUp(self):
        super().setUp()
        self.register()

    def login_otp(self, phone=PHONE, code='123456') -> str:
        return login_phone_otp(phone, code, repo=self.repo, issuer=self.issuer, otp=self.otp)

    def test_send_code_reaches_adapter(self):
        send_phone_otp(PHONE, otp=self.otp)
        self.assertEqual(self.otp.sent, [PHONE])

    def test_approved_code_returns_token(self):
        claims = self.issuer.decode(self.login_otp())

        user = self.repo.get_by_phone(PHONE)
        self.assertEqual(claims.subject_id, user.id)
        self.assertEqual(claims.email, user.email)
        self.assertEqual(self.otp.checks, [(PHONE, '123456')])

    def test_unregistered_phone_never_contacts_adapter(self):
        with patch.object(self.issuer, 'issue') as mock_issue:
            with self.assertRaises(NotFoundError):
                self.login_otp(phone='+15550000000')
            mock_issue.assert_not_called()

        self.assertFalse(self.otp.contacted)

    def test_rejected_code_issues_no_token(self):
        with patch.object(self.issuer, 'issue') as mock_issue:
            with self.assertRaises(OTPRejectedError):
                self.login_otp(code='000000')
            mock_issue.assert_not_called()

    def test_adapter_error_propagates_without_token(self):
        self.otp.error = OTPAdapterError('provider down')

        with patch.object(self.issuer, 'issue') as mock_issue:
            with self.assertRaises(OTPAdapterError):
                self.login_otp()
            mock_issue.assert_not_called()

    def test_store_error_propagates(self):
        self.repo.fail_with = StoreError('down')
        with self.assertRaises(StoreError):
            self.login_otp()
        self.assertFalse(self.otp.contacted)


class TestGetUser(AuthServiceTestCase):

    def test_found(self):
        self.register()
        user_id = self.repo.get_by_email('a@x.com').id

        self.assertEqual(get_user(user_id, repo=self.repo).email, 'a@x.com')

    def test_missing_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            get_user('missing', repo=self.repo)


if __name__ == '__main__':
    unittest.main()
