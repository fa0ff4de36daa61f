from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

from casdoor_sdk.core.models import Model, Record


@dataclass
class ThemeData(Record):
    theme_type: str = ""
    color_primary: str = ""
    border_radius: int = 0
    is_compact: bool = False
    is_enabled: bool = False


@dataclass
class MfaItem(Record):
    name: str = ""
    rule: str = ""


@dataclass
class AccountItem(Record):
    name: str = ""
    visible: bool = False
    view_rule: str = ""
    modify_rule: str = ""


@dataclass
class Organization(Model):
    IDENT: ClassVar[str] = "organization"

    owner: str = ""
    name: str = ""
    created_time: str = ""
    display_name: str = ""
    website_url: str = ""
    favicon: str = ""
    password_type: str = ""
    password_salt: str = field(default="", repr=False)
    password_options: List[str] = field(default_factory=list)
    country_codes: List[str] = field(default_factory=list)
    default_avatar: str = ""
    default_application: str = ""
    tags: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    theme_data: Optional[ThemeData] = None
    master_password: str = field(default="", repr=False)
    init_score: int = 0
    enable_soft_deletion: bool = False
    is_profile_public: bool = False
    mfa_items: List[MfaItem] = field(default_factory=list)
    account_items: List[AccountItem] = field(default_factory=list)
