"""Casdoor certificate and provider operations."""
from __future__ import annotations

from typing import Optional

from casdoor_sdk.models import Cert, Provider

from .client import CasdoorClient
from .models import QueryArgs, QueryResult


class CertService:
    """Service for reading signing certificates."""

    def __init__(self, client: CasdoorClient):
        self.client = client

    async def get_certs(self, query_args: Optional[QueryArgs] = None) -> QueryResult[Cert]:
        return await self.client.get_models(Cert, query_args=query_args or QueryArgs())

    async def get_global_certs(self, query_args: Optional[QueryArgs] = None) -> QueryResult[Cert]:
        """List certificates across all organizations."""
        return await self.client.get_models(Cert, "global", query_args or QueryArgs())

    async def get_cert_by_name(self, name: str) -> Optional[Cert]:
        return await self.client.get_model_by_name(Cert, name)


class ProviderService:
    """Service for reading third-party providers."""

    def __init__(self, client: CasdoorClient):
        self.client = client

    async def get_providers(self, query_args: Optional[QueryArgs] = None) -> QueryResult[Provider]:
        return await self.client.get_models(Provider, query_args=query_args or QueryArgs())

    async def get_global_providers(self, query_args: Optional[QueryArgs] = None) -> QueryResult[Provider]:
        return await self.client.get_models(Provider, "global", query_args or QueryArgs())

    async def get_provider_by_name(self, name: str) -> Optional[Provider]:
        return await self.client.get_model_by_name(Provider, name)
