"""Low-level async HTTP client for the Casdoor API.

Handles Basic authentication, URL construction and envelope decoding.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar, Union
from urllib.parse import urlencode

import httpx

from .envelope import ApiResponse, Decoder, Status, StatusKind
from .exceptions import (
    BusinessError,
    CasdoorError,
    InvalidArgumentError,
    TransportError,
    UnknownStatusError,
    UrlParseError,
)
from .models import Model, ModelAction, ModelActionAffect, QueryArgsMixin, QueryResult, query_value

if TYPE_CHECKING:
    from casdoor_sdk.config import Config

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Model)
Query = Union[QueryArgsMixin, Dict[str, Any], Iterable[Tuple[str, Any]], None]


class CasdoorClient:
    """HTTP client for the Casdoor API.

    Features:
    - HTTP Basic auth with the application's client id/secret on every call
    - Uniform envelope decoding into ``ApiResponse``
    - Generic list/get/add/update/delete helpers shared by the resource services

    A fresh ``httpx.AsyncClient`` is opened per call and nothing on the
    instance is mutated, so one client can serve concurrent tasks.

    Usage:
        client = CasdoorClient(config)
        resp = await client.request("GET", client.url_path("get-users"), data_type=[User])
        users = resp.into_data_default(list)
    """

    def __init__(self, config: "Config", transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize Casdoor client.

        Args:
            config: Casdoor connection settings
            transport: Optional httpx transport (tests inject ``httpx.MockTransport``)
        """
        self.config = config
        self._transport = transport

    def _http(self) -> httpx.AsyncClient:
        kwargs: Dict[str, Any] = {
            "base_url": self.config.endpoint,
            "auth": httpx.BasicAuth(self.config.client_id, self.config.client_secret),
            "transport": self._transport,
        }
        if self.config.timeout is not None:
            kwargs["timeout"] = self.config.timeout
        return httpx.AsyncClient(**kwargs)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        form: Optional[Dict[str, str]] = None,
        data_type: Decoder = None,
        data2_type: Decoder = None,
    ) -> ApiResponse:
        """Execute a request and decode the Casdoor envelope.

        Args:
            method: HTTP method
            path: API path including the query string (see ``url_path``)
            json: JSON payload
            form: Form payload
            data_type: Decoder for the ``data`` slot
            data2_type: Decoder for the ``data2`` slot

        Returns:
            Decoded envelope (not yet resolved)

        Raises:
            TransportError: On network failure or HTTP error status
            UrlParseError: If the resulting URL is malformed
            SerializationError: If the body is not a JSON envelope
        """
        logger.debug("Casdoor %s %s", method, path)
        async with self._http() as http:
            try:
                resp = await http.request(method, path, json=json, data=form)
                self._handle_error(resp)
            except httpx.InvalidURL as exc:
                raise UrlParseError(f"Invalid Casdoor URL {path!r}: {exc}") from exc
            except httpx.HTTPStatusError as exc:
                raise (self._envelope_error(exc.response) or TransportError.from_httpx(exc)) from exc
            except httpx.HTTPError as exc:
                raise TransportError.from_httpx(exc) from exc
        return ApiResponse.from_json(resp.content, data_type, data2_type)

    def _handle_error(self, resp: httpx.Response) -> None:
        """Centralized error handling for HTTP responses.

        Raises:
            httpx.HTTPStatusError: If response status indicates error
        """
        if resp.status_code >= 400:
            logger.debug("Casdoor answered %s for %s", resp.status_code, resp.request.url.path)
            resp.raise_for_status()

    @staticmethod
    def _envelope_error(resp: httpx.Response) -> Optional[CasdoorError]:
        """Error carried by a failed response's envelope, keeping the HTTP status.

        Returns None when the body is not an envelope or its status is ok.
        """
        try:
            payload = resp.json()
        except ValueError:
            return None
        if not isinstance(payload, dict) or "status" not in payload:
            return None
        status = Status.from_dict(payload)
        if status.kind is StatusKind.ERR:
            return BusinessError(status.msg, resp.status_code)
        if status.kind is StatusKind.OTHER:
            return UnknownStatusError(status.label, status.msg, resp.status_code)
        return None

    # ─────────────────────────────────────────────────────────────────────
    # URL helpers
    # ─────────────────────────────────────────────────────────────────────
    def url_path(self, action: str, add_owner: bool = True, query: Query = None) -> str:
        """Build ``/api/{action}?owner={org}&...``.

        ``/`` and ``,`` stay literal so ids (``org/name``) and column lists
        read the way Casdoor documents them.
        """
        pairs: List[Tuple[str, str]] = []
        if add_owner:
            pairs.append(("owner", self.config.org_name))
        if isinstance(query, QueryArgsMixin):
            pairs.extend(query.to_pairs())
        elif isinstance(query, dict):
            pairs.extend((key, query_value(value)) for key, value in query.items())
        elif query:
            pairs.extend((key, query_value(value)) for key, value in query)
        encoded = urlencode(pairs, safe="/,")
        return f"/api/{action}?{encoded}" if encoded else f"/api/{action}"

    # ─────────────────────────────────────────────────────────────────────
    # Generic model operations
    # ─────────────────────────────────────────────────────────────────────
    async def get_models(self, model: Type[M], prefix: str = "", query_args: Query = None) -> QueryResult[M]:
        """List models via ``GET /api/get-[{prefix}-]{plural}``; data2 holds the total."""
        action = f"get-{prefix}-{model.plural_ident()}" if prefix else f"get-{model.plural_ident()}"
        resp = await self.request("GET", self.url_path(action, True, query_args), data_type=[model])
        items, total = resp.into_result_default(list, int)
        return QueryResult(items=items, total=int(total))

    async def get_model_by_name(self, model: Type[M], name: str) -> Optional[M]:
        """Fetch ``{org}/{name}``; ``None`` when Casdoor has no such model."""
        path = self.url_path(f"get-{model.ident()}", False, [("id", self.config.id(name))])
        resp = await self.request("GET", path, data_type=model)
        return resp.into_data()

    async def get_default_model(self, model: Type[M], name: str) -> Optional[M]:
        path = self.url_path(f"get-default-{model.ident()}", False, [("id", self.config.id(name))])
        resp = await self.request("GET", path, data_type=model)
        return resp.into_data()

    async def modify_model(
        self,
        action: ModelAction,
        model: Model,
        columns: Optional[List[str]] = None,
    ) -> bool:
        """POST ``/api/{action}-{ident}?id={owner}/{name}`` with the model as JSON body.

        Returns:
            True if Casdoor reports the model as affected

        Raises:
            InvalidArgumentError: If columns are given for a model without partial updates
        """
        pairs = [("id", model.id())]
        if action is ModelAction.UPDATE and columns:
            if not model.SUPPORTS_UPDATE_COLUMNS:
                raise InvalidArgumentError(
                    f"Casdoor does not support partial updates of '{model.ident()}'"
                )
            pairs.append(("columns", ",".join(columns)))
        path = self.url_path(f"{action}-{model.ident()}", False, pairs)
        resp = await self.request("POST", path, json=model.to_dict(), data_type=ModelActionAffect)
        affect = resp.into_data_default(lambda: ModelActionAffect.AFFECTED)
        logger.debug("Casdoor %s %s -> %s", action, model.id(), affect.value)
        return affect.is_affected()

    async def add_model(self, model: Model) -> bool:
        return await self.modify_model(ModelAction.ADD, model)

    async def update_model(self, model: Model, columns: Optional[List[str]] = None) -> bool:
        return await self.modify_model(ModelAction.UPDATE, model, columns)

    async def delete_model(self, model: Model) -> bool:
        return await self.modify_model(ModelAction.DELETE, model)
