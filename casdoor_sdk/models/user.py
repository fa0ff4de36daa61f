"""User and group records."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional

from casdoor_sdk.core.models import Model, Record

from .authz import Permission, Role


@dataclass
class MfaProps(Record):
    enabled: bool = False
    is_preferred: bool = False
    mfa_type: str = ""
    secret: Optional[str] = None
    country_code: Optional[str] = None
    url: Optional[str] = None
    recovery_codes: Optional[List[str]] = None


@dataclass
class MfaAccount(Record):
    account_name: str = ""
    issuer: str = ""
    secret_key: str = ""


@dataclass
class FaceId(Record):
    name: str = ""
    face_id_data: List[float] = field(default_factory=list)


@dataclass
class ManagedAccount(Record):
    application: str = ""
    username: str = ""
    password: str = ""
    signin_url: str = ""


@dataclass
class User(Model):
    """A Casdoor user.

    ``id_`` holds the server side UUID (wire key ``id``); ``id()`` is the
    ``{owner}/{name}`` identifier every Model exposes.
    """

    IDENT: ClassVar[str] = "user"
    SUPPORTS_UPDATE_COLUMNS: ClassVar[bool] = True

    owner: str = ""
    name: str = ""
    created_time: str = ""
    updated_time: str = ""
    deleted_time: str = ""
    id_: str = ""
    external_id: str = ""
    type_: str = ""
    password: str = field(default="", repr=False)
    password_salt: str = field(default="", repr=False)
    password_type: str = ""
    display_name: str = ""
    first_name: str = ""
    last_name: str = ""
    avatar: str = ""
    avatar_type: str = ""
    permanent_avatar: str = ""
    email: str = ""
    email_verified: bool = False
    phone: str = ""
    country_code: str = ""
    region: str = ""
    location: str = ""
    address: List[str] = field(default_factory=list)
    affiliation: str = ""
    title: str = ""
    id_card_type: str = ""
    id_card: str = ""
    homepage: str = ""
    bio: str = ""
    tag: str = ""
    language: str = ""
    gender: str = ""
    birthday: str = ""
    education: str = ""
    score: int = 0
    karma: int = 0
    ranking: int = 0
    balance: float = 0.0
    currency: str = ""
    is_default_avatar: bool = False
    is_online: bool = False
    is_admin: bool = False
    is_forbidden: bool = False
    is_deleted: bool = False
    signup_application: str = ""
    hash: str = ""
    pre_hash: str = ""
    access_key: str = ""
    access_secret: str = field(default="", repr=False)
    access_token: str = field(default="", repr=False)
    created_ip: str = ""
    last_signin_time: str = ""
    last_signin_ip: str = ""

    # Linked identity provider accounts
    github: str = ""
    google: str = ""
    qq: str = ""
    wechat: str = ""
    facebook: str = ""
    dingtalk: str = ""
    weibo: str = ""
    gitee: str = ""
    linkedin: str = ""
    wecom: str = ""
    lark: str = ""
    gitlab: str = ""
    adfs: str = ""
    baidu: str = ""
    alipay: str = ""
    casdoor: str = ""
    infoflow: str = ""
    apple: str = ""
    azuread: str = ""
    azureadb2c: str = ""
    slack: str = ""
    steam: str = ""
    bilibili: str = ""
    okta: str = ""
    douyin: str = ""
    line: str = ""
    amazon: str = ""
    auth0: str = ""
    bitbucket: str = ""
    discord: str = ""
    dropbox: str = ""
    gitea: str = ""
    instagram: str = ""
    kakao: str = ""
    microsoftonline: str = ""
    paypal: str = ""
    spotify: str = ""
    twitter: str = ""
    yahoo: str = ""
    zoom: str = ""
    metamask: str = ""
    web3onboard: str = ""
    custom: str = ""
    ldap: str = ""

    webauthn_credentials: List[str] = field(default_factory=list)
    preferred_mfa_type: str = ""
    recovery_codes: List[str] = field(default_factory=list, repr=False)
    totp_secret: str = field(default="", repr=False)
    mfa_phone_enabled: bool = False
    mfa_email_enabled: bool = False
    multi_factor_auths: List[MfaProps] = field(default_factory=list)
    invitation: str = ""
    invitation_code: str = ""
    face_ids: List[FaceId] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)
    roles: List[Role] = field(default_factory=list)
    permissions: List[Permission] = field(default_factory=list)
    groups: List[str] = field(default_factory=list)
    last_signin_wrong_time: str = ""
    signin_wrong_times: int = 0
    managed_accounts: List[ManagedAccount] = field(default_factory=list)
    mfa_accounts: List[MfaAccount] = field(default_factory=list)
    need_update_password: bool = False
    ip_whitelist: str = ""


@dataclass
class UserGroup(Model):
    IDENT: ClassVar[str] = "group"

    owner: str = ""
    name: str = ""
    created_time: str = ""
    updated_time: str = ""
    display_name: str = ""
    manager: str = ""
    contact_email: str = ""
    type_: str = ""
    parent_id: str = ""
    is_top_group: bool = False
    users: List[str] = field(default_factory=list)
    title: Optional[str] = None
    key: Optional[str] = None
    children: Optional[List[UserGroup]] = None
    is_enabled: bool = False


class QueryUserSet(str, Enum):
    """``isOnline`` filter for ``get-user-count``."""

    OFFLINE = "0"
    ONLINE = "1"
    ALL = ""

    def __str__(self) -> str:
        return self.value


@dataclass
class GetUserArgs:
    """Selector for ``get_user``; exactly one field must be set."""

    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    def selectors(self) -> Dict[str, str]:
        return {key: value for key, value in vars(self).items() if value is not None}


@dataclass
class SetPasswordArgs:
    user_name: str
    new_password: str = field(repr=False)
    old_password: Optional[str] = field(default=None, repr=False)
    user_owner: Optional[str] = None

    def to_form(self) -> Dict[str, str]:
        form = {"userName": self.user_name, "newPassword": self.new_password}
        if self.old_password is not None:
            form["oldPassword"] = self.old_password
        if self.user_owner is not None:
            form["userOwner"] = self.user_owner
        return form
