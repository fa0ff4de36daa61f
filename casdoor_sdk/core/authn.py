"""Casdoor authentication: OAuth2 token exchange, JWT verification and login URLs.

Token exchange goes through authlib's httpx integration; verification is
local (PyJWT + the configured certificate) and never calls Casdoor.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional
from urllib.parse import quote

import httpx
import jwt
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import AsyncOAuth2Client
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePublicKey
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    ImmatureSignatureError,
    InvalidAlgorithmError,
    InvalidAudienceError,
    InvalidKeyError,
    InvalidSignatureError,
    MissingRequiredClaimError,
    PyJWTError,
)

from casdoor_sdk.models import Claims, OAuthToken

from .exceptions import JwtVerificationError, TokenExchangeError, TransportError

if TYPE_CHECKING:
    from casdoor_sdk.config import Config

logger = logging.getLogger(__name__)

AUTHORIZE_PATH = "/login/oauth/authorize"
SIGNUP_AUTHORIZE_PATH = "/signup/oauth/authorize"
ACCESS_TOKEN_PATH = "/api/login/oauth/access_token"
REFRESH_TOKEN_PATH = "/api/login/oauth/refresh_token"

# Algorithm -> public key type it must be verified with
SUPPORTED_ALGORITHMS = {
    "RS256": RSAPublicKey,
    "RS512": RSAPublicKey,
    "ES256": EllipticCurvePublicKey,
    "ES384": EllipticCurvePublicKey,
}

# Checked in order: subclasses before their bases
_JWT_FAILURES = (
    (ExpiredSignatureError, "expired", "Token expired (exp claim)"),
    (ImmatureSignatureError, "immature", "Token not yet valid (nbf claim)"),
    (InvalidAudienceError, "invalid_audience", "Invalid audience (token not issued for this application)"),
    (InvalidAlgorithmError, "invalid_algorithm", "Token algorithm not allowed"),
    (InvalidSignatureError, "invalid_signature", "Invalid signature (token tampered or wrong key)"),
    (MissingRequiredClaimError, "missing_claim", "Token is missing a required claim"),
    (InvalidKeyError, "invalid_key", "Verification key rejected"),
    (DecodeError, "malformed", "Token decode error (malformed JWT)"),
)


def _jwt_error(exc: PyJWTError) -> JwtVerificationError:
    for exc_type, reason, message in _JWT_FAILURES:
        if isinstance(exc, exc_type):
            return JwtVerificationError(f"{message}: {exc}", reason=reason)
    return JwtVerificationError(f"Token validation failed: {exc}")


class AuthService:
    """OAuth2 and token helpers for a Casdoor application.

    Stateless: tokens are returned to the caller, never stored.
    """

    def __init__(self, config: "Config", transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize auth service.

        Args:
            config: Casdoor connection settings
            transport: Optional httpx transport for the token endpoint calls
        """
        self.config = config
        self._transport = transport

    def _oauth_client(self) -> AsyncOAuth2Client:
        kwargs: Dict[str, Any] = {"transport": self._transport}
        if self.config.timeout is not None:
            kwargs["timeout"] = self.config.timeout
        return AsyncOAuth2Client(
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            token_endpoint_auth_method="client_secret_basic",
            **kwargs,
        )

    # ─────────────────────────────────────────────────────────────────────
    # Token exchange
    # ─────────────────────────────────────────────────────────────────────
    async def get_oauth_token(self, code: str) -> OAuthToken:
        """Exchange an authorization code for tokens.

        Raises:
            TokenExchangeError: Grant rejected, transport failure or malformed response
        """
        async with self._oauth_client() as oauth:
            token = await self._exchange(
                lambda: oauth.fetch_token(
                    self.config.endpoint + ACCESS_TOKEN_PATH,
                    grant_type="authorization_code",
                    code=code,
                )
            )
        logger.info("Exchanged authorization code for %s token", token.token_type)
        return token

    async def refresh_oauth_token(self, refresh_token: str) -> OAuthToken:
        """Trade a refresh token for a new access token.

        Raises:
            TokenExchangeError: Grant rejected, transport failure or malformed response
        """
        if not refresh_token:
            raise TokenExchangeError("Refresh token must not be empty", 400)
        async with self._oauth_client() as oauth:
            token = await self._exchange(
                lambda: oauth.refresh_token(self.config.endpoint + REFRESH_TOKEN_PATH, refresh_token=refresh_token)
            )
        logger.info("Refreshed %s token", token.token_type)
        return token

    async def _exchange(self, send) -> OAuthToken:
        try:
            response = await send()
        except AuthlibBaseError as exc:
            raise TokenExchangeError(f"Token request rejected: {exc}") from exc
        except httpx.HTTPError as exc:
            code = TransportError.from_httpx(exc).status_code
            raise TokenExchangeError(f"Token request failed: {exc}", code) from exc
        except ValueError as exc:
            raise TokenExchangeError(f"Token response is not valid JSON: {exc}") from exc
        try:
            return OAuthToken.from_response(dict(response))
        except KeyError as exc:
            raise TokenExchangeError(f"Token response without {exc}") from exc

    # ─────────────────────────────────────────────────────────────────────
    # JWT verification
    # ─────────────────────────────────────────────────────────────────────
    def parse_jwt_token(self, token: str, algorithm: str = "RS256") -> Claims:
        """Verify a Casdoor-issued JWT and return its claims.

        Validations performed:
        1. Signature, with ``algorithm`` as the only accepted algorithm
        2. Audience equals the configured client id
        3. Expiration (exp, required) and not-before (nbf)

        Args:
            token: Compact JWT
            algorithm: One of RS256, RS512, ES256, ES384

        Returns:
            Verified claims

        Raises:
            JwtVerificationError: With ``reason`` naming the failed check
            ConfigError: If the configured certificate cannot be loaded
        """
        key_type = SUPPORTED_ALGORITHMS.get(algorithm)
        if key_type is None:
            raise JwtVerificationError(f"Unsupported algorithm {algorithm!r}", reason="invalid_algorithm")

        key = self.config.public_key()
        if not isinstance(key, key_type):
            raise JwtVerificationError(
                f"Configured certificate cannot verify {algorithm} tokens", reason="invalid_key"
            )

        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=[algorithm],
                audience=self.config.client_id,
                options={"require": ["exp"], "verify_exp": True, "verify_nbf": True},
            )
        except PyJWTError as exc:
            error = _jwt_error(exc)
            logger.warning("JWT verification failed (%s)", error.reason)
            raise error from exc

        return Claims.from_payload(payload)

    def parse_jwt_token_rs256(self, token: str) -> Claims:
        return self.parse_jwt_token(token, "RS256")

    def parse_jwt_token_rs512(self, token: str) -> Claims:
        return self.parse_jwt_token(token, "RS512")

    def parse_jwt_token_es256(self, token: str) -> Claims:
        return self.parse_jwt_token(token, "ES256")

    def parse_jwt_token_es384(self, token: str) -> Claims:
        return self.parse_jwt_token(token, "ES384")

    # ─────────────────────────────────────────────────────────────────────
    # Browser URLs
    # ─────────────────────────────────────────────────────────────────────
    def get_signin_url(self, redirect_url: str) -> str:
        """Authorization-code login URL that sends the user back to ``redirect_url``."""
        return (
            f"{self.config.endpoint}{AUTHORIZE_PATH}"
            f"?client_id={self.config.client_id}"
            f"&response_type=code"
            f"&redirect_uri={quote(redirect_url, safe='')}"
            f"&scope=read"
            f"&state={self.config.app_name or ''}"
        )

    def get_signup_url(self, redirect_url: str) -> str:
        return self.get_signin_url(redirect_url).replace(AUTHORIZE_PATH, SIGNUP_AUTHORIZE_PATH)

    def get_signup_url_enable_password(self) -> str:
        return f"{self.config.endpoint}/signup/{self.config.app_name or ''}"

    def get_user_profile_url(self, user_name: str, token: Optional[str] = None) -> str:
        param = f"?access_token={token}" if token else ""
        return f"{self.config.endpoint}/users/{self.config.org_name}/{user_name}{param}"

    def get_my_profile_url(self, token: Optional[str] = None) -> str:
        param = f"?access_token={token}" if token else ""
        return f"{self.config.endpoint}/account{param}"
