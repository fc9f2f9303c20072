"""
Session Token Management

Issues and verifies the admin session token: an HS256 JWT carrying
{"role": "admin", "iat", "exp"}. Verification is stateless, there is
no server-side session table.
"""

import hmac
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from jose import JWTError, jwt

from core.exceptions import ConfigurationError, InvalidCredentials
from core.logger import get_logger

logger = get_logger(__name__)

ALGORITHM = "HS256"
ADMIN_ROLE = "admin"
DEFAULT_TTL = 8 * 60 * 60


@dataclass
class SessionVerdict:
    """Outcome of verifying a session token."""

    valid: bool
    claims: dict[str, Any] = field(default_factory=dict)


class SessionGuard:
    """
    Validates session tokens.

    Used by the request gate middleware and by API handlers. verify()
    always returns a verdict and never raises on bad input.
    """

    def __init__(self, secret_key: str):
        if not secret_key:
            raise ConfigurationError("JWT_SECRET is not set")
        self._secret_key = secret_key

    def verify(self, token: str | None) -> SessionVerdict:
        if not token:
            return SessionVerdict(valid=False)

        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[ALGORITHM])
        except JWTError as e:
            logger.debug(f"Rejected session token: {e}")
            return SessionVerdict(valid=False)
        except (ValueError, TypeError) as e:
            logger.debug(f"Unreadable session token: {e}")
            return SessionVerdict(valid=False)

        if claims.get("role") != ADMIN_ROLE or "exp" not in claims:
            return SessionVerdict(valid=False)

        return SessionVerdict(valid=True, claims=claims)


class CredentialVerifier:
    """
    Checks the admin password and issues session tokens.

    Construction fails with ConfigurationError when either secret is
    missing, so a misconfigured process never starts serving.
    """

    def __init__(
        self,
        admin_password: str,
        secret_key: str,
        token_ttl: int = DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ):
        if not admin_password:
            raise ConfigurationError("ADMIN_PASSWORD is not set")
        if not secret_key:
            raise ConfigurationError("JWT_SECRET is not set")

        self._admin_password = admin_password.encode("utf-8")
        self._secret_key = secret_key
        self.token_ttl = token_ttl
        self._clock = clock

    def issue(self, password: str) -> str:
        """
        Exchange the admin password for a signed session token.

        Args:
            password: Password submitted by the client

        Returns:
            Encoded JWT

        Raises:
            InvalidCredentials: If the password does not match
        """
        if not isinstance(password, str) or not hmac.compare_digest(
            password.encode("utf-8"), self._admin_password
        ):
            logger.warning("Admin login rejected: invalid credentials")
            raise InvalidCredentials()

        issued_at = int(self._clock())
        claims = {
            "role": ADMIN_ROLE,
            "iat": issued_at,
            "exp": issued_at + self.token_ttl,
        }
        logger.info("Admin session token issued")
        return jwt.encode(claims, self._secret_key, algorithm=ALGORITHM)
