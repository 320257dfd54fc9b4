"""Signed bearer tokens using PyJWT."""

import logging
from datetime import timedelta

import jwt

from ohshop_admin.application.interfaces import AccessToken, TokenIssuer
from ohshop_admin.domain.entities.document import utc_now
from ohshop_admin.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class JWTTokenIssuer(TokenIssuer):
    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    def issue(self, subject: str) -> AccessToken:
        now = utc_now()
        payload = {
            "sub": subject,
            "iat": now,
            "exp": now + timedelta(minutes=self._expire_minutes),
        }
        token = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return AccessToken(token=token, expires_in=self._expire_minutes * 60)

    def read_subject(self, token: str) -> str:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as e:
            logger.info("Rejected expired access token")
            raise AuthenticationError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("Rejected invalid access token: %s", e)
            raise AuthenticationError("Invalid token") from e

        subject = payload.get("sub")
        if not subject:
            raise AuthenticationError("Invalid token")
        return subject
