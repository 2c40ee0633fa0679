from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from ..core.constants import TOKEN_ALGORITHM, TOKEN_VALIDITY_DAYS
from ..core.exceptions import ConfigurationError, InvalidToken

logger = logging.getLogger(__name__)


class TokenService:
    """Stateless signed session tokens (JWT).

    A token binds the numeric user id (``sub``) and expires after a fixed
    window. There is no refresh: clients log in again after expiry.
    """

    def __init__(
        self,
        secret: str,
        *,
        validity: timedelta = timedelta(days=TOKEN_VALIDITY_DAYS),
        algorithm: str = TOKEN_ALGORITHM,
    ):
        if not secret:
            raise ConfigurationError("JWT secret is not configured")
        self._secret = secret
        self._validity = validity
        self._algorithm = algorithm

    def issue(self, user_id: int, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._validity).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> int:
        """Return the user id bound to ``token`` or raise ``InvalidToken``."""
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            logger.warning("rejected expired token")
            raise InvalidToken("Token has expired")
        except JWTError as e:
            logger.warning("rejected token: %s", e)
            raise InvalidToken()

        try:
            return int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            logger.warning("rejected token without a usable subject")
            raise InvalidToken()
