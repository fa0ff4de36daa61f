"""Casdoor authorization operations: enforcers, policies, permissions and roles."""
from __future__ import annotations

import logging
from typing import List, Optional

from casdoor_sdk.models import (
    BatchEnforceArgs,
    BatchEnforceResult,
    CasbinRule,
    EnforceArgs,
    EnforceResult,
    Enforcer,
    Permission,
    Role,
)

from .client import CasdoorClient
from .models import QueryArgs, QueryResult

logger = logging.getLogger(__name__)


class EnforcerService:
    """Service wrapping Casdoor's casbin endpoints.

    A request is allowed when any of the sub-decisions Casdoor returns for it
    is true (one per matching permission/model).
    """

    def __init__(self, client: CasdoorClient):
        """Initialize enforcer service.

        Args:
            client: Casdoor client
        """
        self.client = client

    async def get_enforcers(self, query_args: Optional[QueryArgs] = None) -> QueryResult[Enforcer]:
        return await self.client.get_models(Enforcer, query_args=query_args or QueryArgs())

    async def get_enforcer(self, name: str) -> Optional[Enforcer]:
        return await self.client.get_model_by_name(Enforcer, name)

    async def enforce(self, args: EnforceArgs) -> EnforceResult:
        """Check one casbin request, e.g. ``["alice", "data1", "read"]``.

        Returns:
            EnforceResult with ``allow`` true if any returned decision is true
        """
        path = self.client.url_path("enforce", True, args.query)
        resp = await self.client.request("POST", path, json=list(args.casbin_request))
        decisions: List[bool] = resp.into_data_default(list)
        allow = any(decisions)
        logger.debug("Casdoor enforce %s -> %s", args.casbin_request, allow)
        return EnforceResult(allow=allow)

    async def batch_enforce(self, args: BatchEnforceArgs) -> BatchEnforceResult:
        """Check several casbin requests at once; one verdict per request."""
        path = self.client.url_path("batch-enforce", True, args.query)
        resp = await self.client.request("POST", path, json=[list(req) for req in args.casbin_requests])
        decisions: List[List[bool]] = resp.into_data_default(list)
        return BatchEnforceResult(allow_list=[any(per_request) for per_request in decisions])

    # ─────────────────────────────────────────────────────────────────────
    # Policies
    # ─────────────────────────────────────────────────────────────────────
    def _enforcer_path(self, action: str, enforcer_name: str) -> str:
        return self.client.url_path(action, False, [("id", self.client.config.id(enforcer_name))])

    async def get_policies(self, enforcer_name: str) -> List[CasbinRule]:
        resp = await self.client.request(
            "GET", self._enforcer_path("get-policies", enforcer_name), data_type=[CasbinRule]
        )
        return resp.into_data_default(list)

    async def add_policy(self, enforcer_name: str, policy: CasbinRule) -> bool:
        resp = await self.client.request(
            "POST", self._enforcer_path("add-policy", enforcer_name), json=policy.to_dict()
        )
        return bool(resp.into_data_default(bool))

    async def remove_policy(self, enforcer_name: str, policy: CasbinRule) -> bool:
        resp = await self.client.request(
            "POST", self._enforcer_path("remove-policy", enforcer_name), json=policy.to_dict()
        )
        return bool(resp.into_data_default(bool))

    async def update_policy(self, enforcer_name: str, old_policy: CasbinRule, new_policy: CasbinRule) -> bool:
        resp = await self.client.request(
            "POST",
            self._enforcer_path("update-policy", enforcer_name),
            json=[old_policy.to_dict(), new_policy.to_dict()],
        )
        return bool(resp.into_data_default(bool))

    # ─────────────────────────────────────────────────────────────────────
    # Permissions and roles
    # ─────────────────────────────────────────────────────────────────────
    async def get_permissions(self, query_args: Optional[QueryArgs] = None) -> QueryResult[Permission]:
        return await self.client.get_models(Permission, query_args=query_args or QueryArgs())

    async def get_permissions_by_submitter(self) -> QueryResult[Permission]:
        """Permissions submitted by the calling application's user."""
        path = self.client.url_path("get-permissions-by-submitter", False)
        resp = await self.client.request("GET", path, data_type=[Permission])
        items, total = resp.into_result_default(list, int)
        return QueryResult(items=items, total=int(total))

    async def get_permissions_by_role(self, role_name: str) -> QueryResult[Permission]:
        path = self.client.url_path("get-permissions-by-role", False, [("id", self.client.config.id(role_name))])
        resp = await self.client.request("GET", path, data_type=[Permission])
        items, total = resp.into_result_default(list, int)
        return QueryResult(items=items, total=int(total))

    async def get_roles(self, query_args: Optional[QueryArgs] = None) -> QueryResult[Role]:
        return await self.client.get_models(Role, query_args=query_args or QueryArgs())

    async def get_roles_by_user(self, user_id: str) -> List[str]:
        """Names of all roles (direct and inherited) held by ``user_id``."""
        path = self.client.url_path("get-all-roles", False, [("userId", user_id)])
        resp = await self.client.request("GET", path)
        return resp.into_data_default(list)
