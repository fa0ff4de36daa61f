"""Token payloads: verified JWT claims and OAuth2 token responses."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .user import User

REGISTERED_CLAIMS = ("iss", "sub", "aud", "exp", "nbf", "iat", "jti")


@dataclass
class Claims:
    """Decoded payload of a Casdoor-issued JWT.

    Casdoor flattens the user record into the token next to the token
    metadata and the registered JWT claims; ``from_payload`` splits them back.
    Only built from a token whose signature and audience were verified.
    """

    user: User = field(default_factory=User)
    access_token: str = field(default="", repr=False)
    tag: str = ""
    token_type: Optional[str] = None
    nonce: Optional[str] = None
    scope: Optional[str] = None
    iss: Optional[str] = None
    sub: Optional[str] = None
    aud: Union[str, List[str], None] = None
    exp: Optional[int] = None
    nbf: Optional[int] = None
    iat: Optional[int] = None
    jti: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Claims":
        registered = {key: payload.get(key) for key in REGISTERED_CLAIMS}
        return cls(
            user=User.from_dict(payload),
            access_token=payload.get("accessToken") or "",
            tag=payload.get("tag") or "",
            token_type=payload.get("tokenType"),
            nonce=payload.get("nonce"),
            scope=payload.get("scope"),
            **registered,
        )


@dataclass
class OAuthToken:
    """Standard OAuth2 token response (RFC 6749 section 5.1)."""

    access_token: str = field(repr=False)
    token_type: str = "Bearer"
    refresh_token: Optional[str] = field(default=None, repr=False)
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    id_token: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_response(cls, token: Dict[str, Any]) -> "OAuthToken":
        return cls(
            access_token=token["access_token"],
            token_type=token.get("token_type") or "Bearer",
            refresh_token=token.get("refresh_token"),
            expires_in=token.get("expires_in"),
            scope=token.get("scope"),
            id_token=token.get("id_token"),
        )
