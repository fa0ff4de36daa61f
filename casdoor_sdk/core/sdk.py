"""Facade bundling every Casdoor service around one shared client."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import httpx

from .applications import ApplicationService
from .authn import AuthService
from .certs import CertService, ProviderService
from .client import CasdoorClient
from .enforcers import EnforcerService
from .organizations import OrganizationService
from .sessions import SessionService
from .users import GroupService, UserService

if TYPE_CHECKING:
    from casdoor_sdk.config import Config


class CasdoorSDK:
    """Entry point to the Casdoor API.

    Usage:
        sdk = CasdoorSDK(load_config())
        page = await sdk.users.get_users(UserQueryArgs(page=1, page_size=20))
        claims = sdk.authn.parse_jwt_token(token, "RS256")
    """

    def __init__(self, config: "Config", transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.client = CasdoorClient(config, transport=transport)
        self.users = UserService(self.client)
        self.groups = GroupService(self.client)
        self.applications = ApplicationService(self.client)
        self.organizations = OrganizationService(self.client)
        self.certs = CertService(self.client)
        self.providers = ProviderService(self.client)
        self.enforcers = EnforcerService(self.client)
        self.sessions = SessionService(self.client)
        self.authn = AuthService(config, transport=transport)
