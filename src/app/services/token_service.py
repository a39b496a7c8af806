"""
Token Service

Mints and verifies HS256 bearer tokens. Holds no state beyond the signing
secret; refresh sessions are tracked separately in the session registry.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenService:
    """
    Issues access/refresh token pairs over the same identity claims.

    Claims: user_id, username, role, exp, iat. Refresh tokens add
    type="refresh" and a random jti so two pairs minted in the same
    second never share a refresh token.
    """

    def __init__(
        self,
        secret: Optional[str],
        algorithm: str = "HS256",
        access_token_ttl: timedelta = timedelta(hours=1),
        refresh_token_ttl: timedelta = timedelta(days=7),
    ):
        if not secret:
            # Restarting invalidates every token signed with this secret
            logger.warning("No JWT_SECRET configured, using an ephemeral random secret")
            secret = secrets.token_hex(32)
        self._secret = secret
        self.algorithm = algorithm
        self.access_token_ttl = access_token_ttl
        self.refresh_token_ttl = refresh_token_ttl

    def _encode(self, claims: dict, ttl: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {**claims, "exp": now + ttl, "iat": now}
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def create_access_token(self, user_id: int, username: str, role: str) -> str:
        claims = {"user_id": user_id, "username": username, "role": role}
        return self._encode(claims, self.access_token_ttl)

    def issue_token_pair(self, user_id: int, username: str, role: str) -> TokenPair:
        claims = {"user_id": user_id, "username": username, "role": role}
        refresh_claims = {
            **claims,
            "type": REFRESH_TOKEN_TYPE,
            "jti": secrets.token_urlsafe(16),
        }
        return TokenPair(
            access_token=self._encode(claims, self.access_token_ttl),
            refresh_token=self._encode(refresh_claims, self.refresh_token_ttl),
        )

    def verify(self, token: str) -> Optional[dict]:
        """
        Verify signature and expiry.

        Returns:
            Decoded claims, or None for any failure (malformed, expired,
            bad signature). Failures are deliberately indistinguishable.
        """
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError:
            return None


_token_service: Optional[TokenService] = None


def init_token_service(config) -> TokenService:
    """Build the process-wide token service from ApplicationConfig"""
    global _token_service
    _token_service = TokenService(
        secret=config.JWT_SECRET,
        algorithm=config.JWT_ALGORITHM,
        access_token_ttl=timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES),
        refresh_token_ttl=timedelta(days=config.REFRESH_TOKEN_EXPIRE_DAYS),
    )
    return _token_service


def get_token_service() -> Optional[TokenService]:
    return _token_service


def reset_token_service() -> None:
    global _token_service
    _token_service = None
