from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict

from casdoor_sdk.core.models import Model


@dataclass
class Provider(Model):
    """Third-party integration (OAuth, SMS, email, storage, SAML...) configured in Casdoor."""

    IDENT: ClassVar[str] = "provider"

    owner: str = ""
    name: str = ""
    created_time: str = ""
    display_name: str = ""
    category: str = ""
    type_: str = ""
    sub_type: str = ""
    method: str = ""
    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    client_id2: str = ""
    client_secret2: str = field(default="", repr=False)
    cert: str = ""
    custom_auth_url: str = ""
    custom_token_url: str = ""
    custom_user_info_url: str = ""
    custom_logo: str = ""
    scopes: str = ""
    user_mapping: Dict[str, str] = field(default_factory=dict)

    host: str = ""
    port: int = 0
    # WeChat providers reuse this as "enable QR code"
    disable_ssl: bool = False
    title: str = ""
    content: str = ""
    receiver: str = ""

    region_id: str = ""
    sign_name: str = ""
    template_code: str = ""
    app_id: str = ""

    endpoint: str = ""
    intranet_endpoint: str = ""
    domain: str = ""
    bucket: str = ""
    path_prefix: str = ""

    metadata: str = ""
    idp: str = ""
    issuer_url: str = ""
    enable_sign_authn_request: bool = False

    provider_url: str = ""
