"""Casdoor application operations."""
from __future__ import annotations

from typing import Optional

from casdoor_sdk.models import Application

from .client import CasdoorClient
from .models import ApplicationQueryArgs, QueryResult


class ApplicationService:
    """Service for reading Casdoor applications."""

    def __init__(self, client: CasdoorClient):
        self.client = client

    async def get_applications(self, query_args: Optional[ApplicationQueryArgs] = None) -> QueryResult[Application]:
        return await self.client.get_models(Application, query_args=query_args or ApplicationQueryArgs())

    async def get_organization_applications(
        self, query_args: Optional[ApplicationQueryArgs] = None
    ) -> QueryResult[Application]:
        """List applications of an organization (``get-organization-applications``)."""
        return await self.client.get_models(
            Application, "organization", query_args or ApplicationQueryArgs()
        )

    async def get_user_application(self, user_name: str) -> Optional[Application]:
        """Return the application a user signed up through."""
        path = self.client.url_path(
            "get-user-application", False, [("id", self.client.config.id(user_name))]
        )
        resp = await self.client.request("GET", path, data_type=Application)
        return resp.into_data()

    async def get_application(self, name: str) -> Optional[Application]:
        return await self.client.get_model_by_name(Application, name)
