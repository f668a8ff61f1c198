"""Unit tests for TokenService."""

import unittest
from datetime import datetime, timedelta, timezone

from jose import jwt

from domain.model.errors import InvalidTokenError
from domain.model.user import TokenClaims
from services.token_service import JWT_ALGORITHM, TokenService

SECRET = "test-secret-key"


class TestIssue(unittest.TestCase):

    def setUp(self):
        self.tokens = TokenService(SECRET)

    def test_token_embeds_user_id_and_email(self):
        token = self.tokens.issue('user-1', 'al@x.com')

        payload = jwt.decode(token, SECRET, algorithms=[JWT_ALGORITHM])
        self.assertEqual(payload['userId'], 'user-1')
        self.assertEqual(payload['email'], 'al@x.com')

    def test_token_expires_one_hour_after_issuance(self):
        token = self.tokens.issue('user-1', 'al@x.com')

        payload = jwt.decode(token, SECRET, algorithms=[JWT_ALGORITHM])
        self.assertEqual(payload['exp'] - payload['iat'], 3600)


class TestVerify(unittest.TestCase):

    def setUp(self):
        self.tokens = TokenService(SECRET)

    def test_round_trip(self):
        token = self.tokens.issue('user-1', 'al@x.com')

        claims = self.tokens.verify(token)

        self.assertEqual(claims, TokenClaims(user_id='user-1', email='al@x.com'))

    def test_rejects_token_signed_with_other_key(self):
        token = TokenService('another-key').issue('user-1', 'al@x.com')

        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(token)

    def test_rejects_expired_token(self):
        token = TokenService(SECRET, expires_minutes=-1).issue('user-1', 'al@x.com')

        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(token)

    def test_rejects_garbage(self):
        with self.assertRaises(InvalidTokenError):
            self.tokens.verify('not-a-jwt')

    def test_rejects_token_without_identity_claims(self):
        token = jwt.encode(
            {'sub': 'user-1', 'exp': datetime.now(timezone.utc) + timedelta(minutes=5)},
            SECRET,
            algorithm=JWT_ALGORITHM,
        )

        with self.assertRaises(InvalidTokenError):
            self.tokens.verify(token)

    def test_all_failures_share_one_message(self):
        expired = TokenService(SECRET, expires_minutes=-1).issue('user-1', 'al@x.com')
        forged = TokenService('another-key').issue('user-1', 'al@x.com')

        messages = set()
        for token in (expired, forged, 'garbage'):
            with self.assertRaises(InvalidTokenError) as ctx:
                self.tokens.verify(token)
            messages.add(ctx.exception.message)

        self.assertEqual(messages, {'Authentication failed!'})
        self.assertEqual(InvalidTokenError().code, 403)


if __name__ == '__main__':
    unittest.main()
