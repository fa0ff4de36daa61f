"""Authorization records: enforcers, permissions, roles and casbin policies."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional

from casdoor_sdk.core.models import Model, QueryArgsMixin, Record

# One casbin request, e.g. ["alice", "data1", "read"]
CasbinRequest = List[str]


@dataclass
class Enforcer(Model):
    IDENT: ClassVar[str] = "enforcer"

    owner: str = ""
    name: str = ""
    created_time: str = ""
    updated_time: str = ""
    display_name: str = ""
    description: str = ""
    model: str = ""
    adapter: str = ""
    model_cfg: Dict[str, str] = field(default_factory=dict)


@dataclass
class Permission(Model):
    IDENT: ClassVar[str] = "permission"

    owner: str = ""
    name: str = ""
    created_time: str = ""
    display_name: str = ""
    description: str = ""
    users: List[str] = field(default_factory=list)
    groups: List[str] = field(default_factory=list)
    roles: List[str] = field(default_factory=list)
    domains: List[str] = field(default_factory=list)
    model: str = ""
    adapter: str = ""
    resource_type: str = ""
    resources: List[str] = field(default_factory=list)
    actions: List[str] = field(default_factory=list)
    effect: str = ""
    is_enabled: bool = False
    submitter: str = ""
    approver: str = ""
    approve_time: str = ""
    state: str = ""


@dataclass
class Role(Model):
    IDENT: ClassVar[str] = "role"

    owner: str = ""
    name: str = ""
    created_time: str = ""
    display_name: str = ""
    description: str = ""
    users: List[str] = field(default_factory=list)
    groups: List[str] = field(default_factory=list)
    roles: List[str] = field(default_factory=list)
    domains: List[str] = field(default_factory=list)
    is_enabled: bool = False


def _pascal(name: str):
    return field(default="", metadata={"wire": name})


@dataclass
class CasbinRule(Record):
    """A single policy line. Casdoor serializes these in PascalCase."""

    id: int = field(default=0, metadata={"wire": "Id"})
    ptype: str = _pascal("Ptype")
    v0: str = _pascal("V0")
    v1: str = _pascal("V1")
    v2: str = _pascal("V2")
    v3: str = _pascal("V3")
    v4: str = _pascal("V4")
    v5: str = _pascal("V5")


@dataclass
class EnforceQueryArgs(QueryArgsMixin):
    """Selects which permission, model, resource or enforcer decides a request."""

    permission_id: Optional[str] = None
    model_id: Optional[str] = None
    resource_id: Optional[str] = None
    enforcer_id: Optional[str] = None


@dataclass
class BatchEnforceQueryArgs(QueryArgsMixin):
    permission_id: Optional[str] = None
    model_id: Optional[str] = None
    enforcer_id: Optional[str] = None


@dataclass
class EnforceArgs:
    casbin_request: CasbinRequest
    query: EnforceQueryArgs = field(default_factory=EnforceQueryArgs)


@dataclass
class BatchEnforceArgs:
    casbin_requests: List[CasbinRequest]
    query: BatchEnforceQueryArgs = field(default_factory=BatchEnforceQueryArgs)


@dataclass
class EnforceResult:
    allow: bool = False


@dataclass
class BatchEnforceResult:
    allow_list: List[bool] = field(default_factory=list)
