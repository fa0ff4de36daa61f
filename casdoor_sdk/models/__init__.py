"""Casdoor resource records."""
from .application import (
    Application,
    ProviderItem,
    SamlItem,
    SigninItem,
    SigninMethod,
    SignupItem,
)
from .authz import (
    BatchEnforceArgs,
    BatchEnforceQueryArgs,
    BatchEnforceResult,
    CasbinRequest,
    CasbinRule,
    EnforceArgs,
    EnforceQueryArgs,
    EnforceResult,
    Enforcer,
    Permission,
    Role,
)
from .cert import Cert
from .claims import Claims, OAuthToken
from .organization import AccountItem, MfaItem, Organization, ThemeData
from .provider import Provider
from .session import Session
from .user import (
    FaceId,
    GetUserArgs,
    ManagedAccount,
    MfaAccount,
    MfaProps,
    QueryUserSet,
    SetPasswordArgs,
    User,
    UserGroup,
)

__all__ = [
    "AccountItem",
    "Application",
    "BatchEnforceArgs",
    "BatchEnforceQueryArgs",
    "BatchEnforceResult",
    "CasbinRequest",
    "CasbinRule",
    "Cert",
    "Claims",
    "EnforceArgs",
    "EnforceQueryArgs",
    "EnforceResult",
    "Enforcer",
    "FaceId",
    "GetUserArgs",
    "ManagedAccount",
    "MfaAccount",
    "MfaItem",
    "MfaProps",
    "OAuthToken",
    "Organization",
    "Permission",
    "Provider",
    "ProviderItem",
    "QueryUserSet",
    "Role",
    "SamlItem",
    "Session",
    "SetPasswordArgs",
    "SigninItem",
    "SigninMethod",
    "SignupItem",
    "ThemeData",
    "User",
    "UserGroup",
]
