"""Casdoor organization operations."""
from __future__ import annotations

from typing import List, Optional

from casdoor_sdk.models import Organization

from .client import CasdoorClient
from .models import OrganizationQueryArgs, QueryResult


class OrganizationService:
    """Service for reading Casdoor organizations."""

    def __init__(self, client: CasdoorClient):
        self.client = client

    async def get_organizations(
        self, query_args: Optional[OrganizationQueryArgs] = None
    ) -> QueryResult[Organization]:
        return await self.client.get_models(Organization, query_args=query_args or OrganizationQueryArgs())

    async def get_organization_names(self) -> List[Organization]:
        """List organizations; Casdoor only fills ``name`` and ``display_name``."""
        path = self.client.url_path("get-organization-names", True)
        resp = await self.client.request("GET", path, data_type=[Organization])
        return resp.into_data_default(list)

    async def get_default_organization(self, name: str) -> Optional[Organization]:
        return await self.client.get_default_model(Organization, name)
