from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

from casdoor_sdk.core.models import Model, Record

from .cert import Cert
from .organization import Organization, ThemeData
from .provider import Provider


@dataclass
class ProviderItem(Record):
    owner: str = ""
    name: str = ""
    can_sign_up: bool = False
    can_sign_in: bool = False
    can_unlink: bool = False
    prompted: bool = False
    alert_type: str = ""
    rule: str = ""
    provider: Optional[Provider] = None


@dataclass
class SignupItem(Record):
    name: str = ""
    visible: bool = False
    required: bool = False
    prompted: bool = False
    custom_css: str = ""
    label: str = ""
    placeholder: str = ""
    regex: str = ""
    rule: str = ""


@dataclass
class SigninMethod(Record):
    name: str = ""
    display_name: str = ""
    rule: str = ""


@dataclass
class SigninItem(Record):
    name: str = ""
    visible: bool = False
    label: str = ""
    custom_css: str = ""
    placeholder: str = ""
    rule: str = ""
    is_custom: bool = False


@dataclass
class SamlItem(Record):
    name: str = ""
    name_format: str = ""
    value: str = ""


@dataclass
class Application(Model):
    """An OAuth/OIDC application registered in Casdoor."""

    IDENT: ClassVar[str] = "application"

    owner: str = ""
    name: str = ""
    created_time: str = ""

    display_name: str = ""
    logo: str = ""
    homepage_url: str = ""
    description: str = ""
    organization: str = ""
    cert: str = ""
    header_html: str = ""
    enable_password: bool = False
    enable_sign_up: bool = False
    enable_signin_session: bool = False
    enable_auto_signin: bool = False
    enable_code_signin: bool = False
    enable_saml_compress: bool = False
    enable_saml_c14n10: bool = False
    enable_saml_post_binding: bool = False
    use_email_as_saml_name_id: bool = False
    enable_web_authn: bool = False
    enable_link_with_email: bool = False
    org_choice_mode: str = ""
    saml_reply_url: str = ""
    providers: List[ProviderItem] = field(default_factory=list)
    signin_methods: List[SigninMethod] = field(default_factory=list)
    signup_items: List[SignupItem] = field(default_factory=list)
    signin_items: List[SigninItem] = field(default_factory=list)
    grant_types: List[str] = field(default_factory=list)
    organization_obj: Optional[Organization] = None
    cert_public_key: str = ""
    tags: List[str] = field(default_factory=list)
    saml_attributes: List[SamlItem] = field(default_factory=list)
    is_shared: bool = False

    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    redirect_uris: List[str] = field(default_factory=list)
    token_format: str = ""
    token_signing_method: str = ""
    token_fields: List[str] = field(default_factory=list)
    expire_in_hours: int = 0
    refresh_expire_in_hours: int = 0
    signup_url: str = ""
    signin_url: str = ""
    forget_url: str = ""
    affiliation_url: str = ""
    terms_of_use: str = ""
    signup_html: str = ""
    signin_html: str = ""
    theme_data: Optional[ThemeData] = None
    footer_html: str = ""
    form_css: str = ""
    form_css_mobile: str = ""
    form_offset: int = 0
    form_side_html: str = ""
    form_background_url: str = ""

    failed_signin_limit: int = 0
    failed_signin_frozen_time: int = 0

    cert_obj: Optional[Cert] = None
