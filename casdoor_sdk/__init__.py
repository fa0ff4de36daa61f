"""Async client library for the Casdoor identity and access management API.

Architecture:
- config: immutable connection settings (TOML, environment, Docker secrets)
- core.client: HTTP dispatcher with Basic auth and envelope decoding
- core.envelope: the ``{data, data2, status, msg}`` response envelope and its resolvers
- core.<resource>: one service per resource family (users, applications, ...)
- core.authn: OAuth2 token exchange, JWT verification, login URLs
- models: resource records
- api: Flask error conversion for services embedding the SDK

Usage:
    from casdoor_sdk import CasdoorSDK, load_config

    sdk = CasdoorSDK(load_config())
    user = await sdk.users.get_user_by_name("alice")
"""
from .core.exceptions import (
    BusinessError,
    CasdoorError,
    ConfigError,
    InvalidArgumentError,
    JwtVerificationError,
    NotFoundError,
    SerializationError,
    TokenExchangeError,
    TransportError,
    UnknownStatusError,
    UrlParseError,
)
from .config import Config, load_config
from .core.envelope import ApiResponse, Status, StatusKind
from .core.models import (
    ApplicationQueryArgs,
    Model,
    ModelAction,
    ModelActionAffect,
    OrganizationQueryArgs,
    QueryArgs,
    QueryResult,
    UserGroupQueryArgs,
    UserQueryArgs,
)
from .core.client import CasdoorClient
from .core.applications import ApplicationService
from .core.authn import AuthService
from .core.certs import CertService, ProviderService
from .core.enforcers import EnforcerService
from .core.organizations import OrganizationService
from .core.sessions import SessionService
from .core.users import GroupService, UserService
from .core.sdk import CasdoorSDK

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "CasdoorSDK",
    "CasdoorClient",
    "Config",
    "load_config",
    # Services
    "ApplicationService",
    "AuthService",
    "CertService",
    "EnforcerService",
    "GroupService",
    "OrganizationService",
    "ProviderService",
    "SessionService",
    "UserService",
    # Envelope
    "ApiResponse",
    "Status",
    "StatusKind",
    # Models and query args
    "Model",
    "ModelAction",
    "ModelActionAffect",
    "QueryResult",
    "QueryArgs",
    "UserQueryArgs",
    "UserGroupQueryArgs",
    "ApplicationQueryArgs",
    "OrganizationQueryArgs",
    # Exceptions
    "CasdoorError",
    "TransportError",
    "SerializationError",
    "UrlParseError",
    "TokenExchangeError",
    "JwtVerificationError",
    "BusinessError",
    "UnknownStatusError",
    "NotFoundError",
    "InvalidArgumentError",
    "ConfigError",
]
