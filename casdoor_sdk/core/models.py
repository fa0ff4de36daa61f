"""Shared model plumbing: wire codec, resource identity and query arguments.

Casdoor speaks camelCase JSON. Records declare snake_case dataclass fields and
the codec below translates them; a field can override its wire name with
``field(metadata={"wire": "type"})``.

Usage:
    user = User.from_dict({"owner": "built-in", "name": "alice", "displayName": "Alice"})
    user.id()               # "built-in/alice"
    user.to_dict()["displayName"]

    UserQueryArgs(page=0, page_size=1).to_query()   # "pageSize=1&p=0"
"""
from __future__ import annotations

import dataclasses
import functools
import inspect
import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Generic, List, Optional, TypeVar
from urllib.parse import urlencode

T = TypeVar("T")


def camel_case(name: str) -> str:
    """Convert a snake_case attribute name to Casdoor's camelCase key."""
    head, *rest = name.rstrip("_").split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def wire_name(f: dataclasses.Field) -> str:
    return f.metadata.get("wire") or camel_case(f.name)


def _field_default(f: dataclasses.Field) -> Any:
    if f.default is not dataclasses.MISSING:
        return f.default
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory()
    return None


@functools.lru_cache(maxsize=None)
def _type_hints(cls: type) -> Dict[str, Any]:
    return typing.get_type_hints(cls)


def _decode(tp: Any, value: Any) -> Any:
    origin = typing.get_origin(tp)
    if origin in (typing.Union, types.UnionType):
        inner = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        return _decode(inner[0], value) if len(inner) == 1 else value
    if origin is list:
        (item_type,) = typing.get_args(tp) or (Any,)
        return [_decode(item_type, item) for item in value]
    if inspect.isclass(tp) and issubclass(tp, Record) and isinstance(value, dict):
        return tp.from_dict(value)
    return value


def _encode(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {key: _encode(item) for key, item in value.items()}
    return value


class Record:
    """Dataclass mixin translating between snake_case fields and camelCase JSON."""

    @classmethod
    def from_dict(cls: type[T], payload: Optional[Dict[str, Any]]) -> T:
        """Build the record from a decoded JSON object.

        Unknown keys are ignored, missing or ``null`` keys fall back to the
        field default, nested records are decoded recursively.
        """
        payload = payload or {}
        hints = _type_hints(cls)
        kwargs = {}
        for f in dataclasses.fields(cls):
            if not f.init:
                continue
            value = payload.get(wire_name(f))
            if value is None:
                kwargs[f.name] = _field_default(f)
            else:
                kwargs[f.name] = _decode(hints.get(f.name, Any), value)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Encode the record with Casdoor's wire names, in declaration order."""
        return {wire_name(f): _encode(getattr(self, f.name)) for f in dataclasses.fields(self)}


class Model(Record):
    """A Casdoor resource addressed by ``{owner}/{name}``.

    Subclasses set ``IDENT`` (used to build ``/api/get-{ident}`` style paths),
    ``PLURAL_IDENT`` and whether the server accepts partial column updates.
    """

    IDENT: ClassVar[str] = ""
    PLURAL_IDENT: ClassVar[str] = ""
    SUPPORTS_UPDATE_COLUMNS: ClassVar[bool] = False

    owner: str
    name: str

    @classmethod
    def ident(cls) -> str:
        return cls.IDENT

    @classmethod
    def plural_ident(cls) -> str:
        return cls.PLURAL_IDENT or f"{cls.IDENT}s"

    def id(self) -> str:
        return f"{self.owner}/{self.name}"


class ModelAction(str, Enum):
    """Mutation verb spliced into ``/api/{action}-{ident}``."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"

    def __str__(self) -> str:
        return self.value


class ModelActionAffect(str, Enum):
    AFFECTED = "Affected"
    UNAFFECTED = "Unaffected"

    def is_affected(self) -> bool:
        return self is ModelActionAffect.AFFECTED


@dataclass
class QueryResult(Generic[T]):
    """A page of models plus the server-side total count."""

    items: List[T] = field(default_factory=list)
    total: int = 0


def query_value(value: Any) -> str:
    """Render one query parameter value; booleans go out as ``true``/``false``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class QueryArgsMixin:
    """Encode a dataclass of optional query parameters, skipping unset ones."""

    def to_pairs(self) -> List[tuple[str, str]]:
        pairs = []
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            pairs.append((wire_name(f), query_value(value)))
        return pairs

    def to_query(self) -> str:
        return urlencode(self.to_pairs())


def _page() -> Any:
    return field(default=None, metadata={"wire": "p"})


@dataclass
class QueryArgs(QueryArgsMixin):
    page_size: Optional[int] = None
    page: Optional[int] = _page()
    field: Optional[str] = None
    value: Optional[str] = None
    sort_field: Optional[str] = None
    sort_order: Optional[str] = None


@dataclass
class UserQueryArgs(QueryArgsMixin):
    group_name: Optional[str] = None
    page_size: Optional[int] = None
    page: Optional[int] = _page()
    field: Optional[str] = None
    value: Optional[str] = None
    sort_field: Optional[str] = None
    sort_order: Optional[str] = None


@dataclass
class UserGroupQueryArgs(QueryArgsMixin):
    with_tree: Optional[str] = None
    page_size: Optional[int] = None
    page: Optional[int] = _page()
    field: Optional[str] = None
    value: Optional[str] = None
    sort_field: Optional[str] = None
    sort_order: Optional[str] = None


@dataclass
class ApplicationQueryArgs(QueryArgsMixin):
    page_size: Optional[int] = None
    page: Optional[int] = _page()
    field: Optional[str] = None
    value: Optional[str] = None
    sort_field: Optional[str] = None
    sort_order: Optional[str] = None
    organization_name: Optional[str] = None


@dataclass
class OrganizationQueryArgs(QueryArgsMixin):
    page_size: Optional[int] = None
    page: Optional[int] = _page()
    field: Optional[str] = None
    value: Optional[str] = None
    sort_field: Optional[str] = None
    sort_order: Optional[str] = None
    organization_name: Optional[str] = None
