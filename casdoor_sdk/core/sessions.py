"""Casdoor session operations."""
from __future__ import annotations

from typing import Optional

from casdoor_sdk.models import Session

from .client import CasdoorClient
from .models import QueryArgs, QueryResult


class SessionService:
    """Service for inspecting Casdoor login sessions.

    Sessions are addressed by their ``owner/name/application`` primary key
    (see ``Session.get_pk_id``).
    """

    def __init__(self, client: CasdoorClient):
        self.client = client

    async def get_sessions(self, query_args: Optional[QueryArgs] = None) -> QueryResult[Session]:
        return await self.client.get_models(Session, query_args=query_args or QueryArgs())

    async def get_session(self, session_pk_id: str) -> Session:
        """Return the session, or an empty ``Session`` if Casdoor has none."""
        path = self.client.url_path("get-session", True, [("sessionPkId", session_pk_id)])
        resp = await self.client.request("GET", path, data_type=Session)
        return resp.into_data_default(Session)

    async def is_session_duplicated(self, session_pk_id: str, session_id: str) -> bool:
        path = self.client.url_path(
            "is-session-duplicated", True, [("sessionPkId", session_pk_id), ("sessionId", session_id)]
        )
        resp = await self.client.request("GET", path)
        return bool(resp.into_data_default(bool))
