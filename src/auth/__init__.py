"""
Authentication Module

Admin access control in three parts:
1. Credential Verifier - exchanges the admin password for a signed session token
2. Session Guard - stateless token verification (signature, expiry, role)
3. Request Gate - middleware redirecting anonymous admin page requests to login

Plus a per-client write rate limiter for the menu mutation endpoint.
"""

from .middleware import SESSION_COOKIE, AuthMiddleware
from .rate_limiter import RateLimiter, client_identifier
from .token_manager import CredentialVerifier, SessionGuard, SessionVerdict

__all__ = [
    "AuthMiddleware",
    "SESSION_COOKIE",
    "RateLimiter",
    "client_identifier",
    "CredentialVerifier",
    "SessionGuard",
    "SessionVerdict",
]
