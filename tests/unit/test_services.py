from urllib.parse import parse_qs

import pytest

from casdoor_sdk import InvalidArgumentError, UserQueryArgs
from casdoor_sdk.models import (
    BatchEnforceArgs,
    BatchEnforceQueryArgs,
    CasbinRule,
    EnforceArgs,
    EnforceQueryArgs,
    GetUserArgs,
    QueryUserSet,
    SetPasswordArgs,
    User,
)
from tests.conftest import envelope


# ─────────────────────────────────────────────────────────────────────────────
# Users
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_get_users(sdk, stub):
    stub.reply("GET", "/api/get-users", envelope([{"owner": "built-in", "name": "alice"}], 1))
    page = await sdk.users.get_users(UserQueryArgs(page=1, page_size=10))
    assert page.total == 1
    assert page.items[0].name == "alice"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "user_set, expected",
    [(QueryUserSet.ONLINE, "1"), (QueryUserSet.OFFLINE, "0"), (QueryUserSet.ALL, "")],
)
async def test_get_user_count(sdk, stub, user_set, expected):
    stub.reply("GET", "/api/get-user-count", envelope(12))
    assert await sdk.users.get_user_count(user_set) == 12
    assert stub.last.url.params["isOnline"] == expected


@pytest.mark.asyncio
async def test_get_user_by_name_uses_org_id(sdk, stub):
    stub.reply("GET", "/api/get-user", envelope({"owner": "built-in", "name": "alice", "email": "a@x.io"}))
    user = await sdk.users.get_user_by_name("alice")
    assert user.email == "a@x.io"
    assert stub.last.url.params["id"] == "built-in/alice"
    assert "owner" not in stub.last.url.params


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "args, key, value",
    [
        (GetUserArgs(email="a@x.io"), "email", "a@x.io"),
        (GetUserArgs(phone="5550100"), "phone", "5550100"),
        (GetUserArgs(user_id="uuid-1"), "userId", "uuid-1"),
    ],
)
async def test_get_user_selectors(sdk, stub, args, key, value):
    stub.reply("GET", "/api/get-user", envelope(None))
    assert await sdk.users.get_user(args) is None
    assert stub.last.url.params["owner"] == "built-in"
    assert stub.last.url.params[key] == value


@pytest.mark.asyncio
@pytest.mark.parametrize("args", [GetUserArgs(), GetUserArgs(name="alice", email="a@x.io")])
async def test_get_user_requires_exactly_one_selector(sdk, stub, args):
    with pytest.raises(InvalidArgumentError):
        await sdk.users.get_user(args)
    assert stub.requests == []


@pytest.mark.asyncio
async def test_set_user_password_posts_form(sdk, stub):
    stub.reply("POST", "/api/set-password", envelope(None))
    assert await sdk.users.set_user_password(SetPasswordArgs(user_name="alice", new_password="n3w")) is True
    assert stub.last.headers["Content-Type"] == "application/x-www-form-urlencoded"
    form = parse_qs(stub.last.content.decode())
    assert form == {"userName": ["alice"], "newPassword": ["n3w"], "userOwner": ["built-in"]}


@pytest.mark.asyncio
async def test_update_user_partial(sdk, stub):
    stub.reply("POST", "/api/update-user", envelope("Affected"))
    assert await sdk.users.update_user(User(owner="built-in", name="alice"), ["email"]) is True
    assert stub.last.url.params["columns"] == "email"


@pytest.mark.asyncio
async def test_get_group(sdk, stub):
    stub.reply("GET", "/api/get-group", envelope({"owner": "built-in", "name": "staff", "isTopGroup": True}))
    group = await sdk.groups.get_group("staff")
    assert group.is_top_group is True


# ─────────────────────────────────────────────────────────────────────────────
# Applications, organizations, certs, providers
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_get_user_application(sdk, stub):
    stub.reply("GET", "/api/get-user-application", envelope({"owner": "admin", "name": "app-built-in"}))
    app = await sdk.applications.get_user_application("alice")
    assert app.name == "app-built-in"
    assert stub.last.url.params["id"] == "built-in/alice"


@pytest.mark.asyncio
async def test_get_organization_names(sdk, stub):
    stub.reply("GET", "/api/get-organization-names", envelope([{"name": "built-in", "displayName": "Built-in"}]))
    (org,) = await sdk.organizations.get_organization_names()
    assert org.display_name == "Built-in"


@pytest.mark.asyncio
async def test_get_default_organization(sdk, stub):
    stub.reply("GET", "/api/get-default-organization", envelope({"owner": "admin", "name": "built-in"}))
    org = await sdk.organizations.get_default_organization("built-in")
    assert org.id() == "admin/built-in"


@pytest.mark.asyncio
async def test_get_global_certs_and_provider(sdk, stub):
    stub.reply("GET", "/api/get-global-certs", envelope([{"owner": "admin", "name": "cert-built-in"}], 1))
    stub.reply("GET", "/api/get-provider", envelope({"owner": "admin", "name": "github", "type": "GitHub"}))
    certs = await sdk.certs.get_global_certs()
    assert certs.items[0].name == "cert-built-in"
    provider = await sdk.providers.get_provider_by_name("github")
    assert provider.type_ == "GitHub"


# ─────────────────────────────────────────────────────────────────────────────
# Enforcement and policies
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.asyncio
@pytest.mark.critical
async def test_enforce_allows_when_any_decision_is_true(sdk, stub):
    stub.reply("POST", "/api/enforce", envelope([True, False]))
    args = EnforceArgs(casbin_request=["alice", "data1", "read"], query=EnforceQueryArgs(permission_id="built-in/p1"))
    result = await sdk.enforcers.enforce(args)
    assert result.allow is True
    assert stub.last_json() == ["alice", "data1", "read"]
    assert stub.last.url.params["permissionId"] == "built-in/p1"


@pytest.mark.asyncio
async def test_enforce_denies_on_empty_or_false(sdk, stub):
    stub.reply("POST", "/api/enforce", envelope(None))
    assert (await sdk.enforcers.enforce(EnforceArgs(casbin_request=["bob", "data1", "write"]))).allow is False
    stub.reply("POST", "/api/enforce", envelope([False, False]))
    assert (await sdk.enforcers.enforce(EnforceArgs(casbin_request=["bob", "data1", "write"]))).allow is False


@pytest.mark.asyncio
async def test_batch_enforce(sdk, stub):
    stub.reply("POST", "/api/batch-enforce", envelope([[True, False], [False], []]))
    args = BatchEnforceArgs(
        casbin_requests=[["alice", "d", "read"], ["bob", "d", "read"], ["eve", "d", "read"]],
        query=BatchEnforceQueryArgs(model_id="built-in/m"),
    )
    result = await sdk.enforcers.batch_enforce(args)
    assert result.allow_list == [True, False, False]
    assert len(stub.last_json()) == 3


@pytest.mark.asyncio
async def test_policies(sdk, stub):
    stub.reply("GET", "/api/get-policies", envelope([{"Id": 1, "Ptype": "p", "V0": "alice", "V1": "data1"}]))
    stub.reply("POST", "/api/update-policy", envelope(True))
    (rule,) = await sdk.enforcers.get_policies("enforcer-1")
    assert rule.v0 == "alice"
    assert stub.last.url.params["id"] == "built-in/enforcer-1"

    new_rule = CasbinRule(ptype="p", v0="alice", v1="data2")
    assert await sdk.enforcers.update_policy("enforcer-1", rule, new_rule) is True
    old_body, new_body = stub.last_json()
    assert old_body["V1"] == "data1"
    assert new_body["V1"] == "data2"


@pytest.mark.asyncio
async def test_permissions_by_role_and_roles_by_user(sdk, stub):
    stub.reply("GET", "/api/get-permissions-by-role", envelope([{"owner": "built-in", "name": "read-all"}]))
    stub.reply("GET", "/api/get-all-roles", envelope(["built-in/admin"]))
    perms = await sdk.enforcers.get_permissions_by_role("admin")
    assert perms.items[0].name == "read-all"
    assert perms.total == 0
    assert await sdk.enforcers.get_roles_by_user("built-in/alice") == ["built-in/admin"]
    assert stub.last.url.params["userId"] == "built-in/alice"


# ─────────────────────────────────────────────────────────────────────────────
# Sessions
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_get_session_defaults_when_missing(sdk, stub):
    stub.reply("GET", "/api/get-session", envelope(None))
    session = await sdk.sessions.get_session("built-in/alice/app-built-in")
    assert session.session_id == []
    assert stub.last.url.params["sessionPkId"] == "built-in/alice/app-built-in"


@pytest.mark.asyncio
async def test_is_session_duplicated(sdk, stub):
    stub.reply("GET", "/api/is-session-duplicated", envelope(True))
    assert await sdk.sessions.is_session_duplicated("built-in/alice/app", "sid-1") is True
    assert stub.last.url.params["sessionId"] == "sid-1"
