import json

import pytest

from casdoor_sdk import cli
from tests.conftest import CLIENT_ID, CLIENT_SECRET, ENDPOINT, ORG, envelope, make_certificate, mint_jwt

pytestmark = pytest.mark.cli


@pytest.fixture()
def config_file(tmp_path, rsa_key):
    path = tmp_path / "casdoor.toml"
    path.write_text(
        f'endpoint = "{ENDPOINT}"\n'
        f'client_id = "{CLIENT_ID}"\n'
        f'client_secret = "{CLIENT_SECRET}"\n'
        f'certificate = """{make_certificate(rsa_key)}"""\n'
        f'org_name = "{ORG}"\n'
    )
    return str(path)


def run(capsys, stub, config_file, *argv):
    cli.main(["--config", config_file, *argv], transport=stub.transport)
    return json.loads(capsys.readouterr().out)


def test_users_lists_page(capsys, stub, config_file):
    stub.reply("GET", "/api/get-users", envelope([{"owner": ORG, "name": "alice"}], 1))
    output = run(capsys, stub, config_file, "users", "--page", "1", "--page-size", "5")
    assert output["total"] == 1
    assert output["items"][0]["name"] == "alice"
    assert stub.last.url.params["pageSize"] == "5"
    assert stub.last.url.params["p"] == "1"


def test_user_count_online(capsys, stub, config_file):
    stub.reply("GET", "/api/get-user-count", envelope(3))
    assert run(capsys, stub, config_file, "user-count", "--online") == {"count": 3}
    assert stub.last.url.params["isOnline"] == "1"


def test_enforce(capsys, stub, config_file):
    stub.reply("POST", "/api/enforce", envelope([True]))
    output = run(capsys, stub, config_file, "enforce", "--permission-id", "built-in/read", "alice", "data1", "read")
    assert output == {"allow": True}
    assert stub.last_json() == ["alice", "data1", "read"]


def test_missing_user_exits_with_error(capsys, stub, config_file):
    stub.reply("GET", "/api/get-user", envelope(None))
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", config_file, "user", "ghost"], transport=stub.transport)
    assert excinfo.value.code == 1
    assert "[casdoor] User 'ghost' not found" in capsys.readouterr().err


def test_business_error_exits_with_error(capsys, stub, config_file):
    stub.reply("GET", "/api/get-users", envelope(status="error", msg="Unauthorized operation"))
    with pytest.raises(SystemExit):
        cli.main(["--config", config_file, "users"], transport=stub.transport)
    assert "Unauthorized operation" in capsys.readouterr().err


def test_verify_token(capsys, stub, config_file, rsa_key):
    output = run(capsys, stub, config_file, "verify-token", mint_jwt(rsa_key))
    assert output["user"]["displayName"] == "Alice Doe"
    assert output["aud"] == CLIENT_ID
    assert stub.requests == []


def test_verify_token_rejected(capsys, stub, config_file, rsa_key):
    with pytest.raises(SystemExit):
        cli.main(["--config", config_file, "verify-token", mint_jwt(rsa_key, exp_offset=-60)])
    assert "Token expired" in capsys.readouterr().err


def test_missing_config_file(capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", str(tmp_path / "absent.toml"), "users"])
    assert excinfo.value.code == 1
    assert "Cannot load Casdoor config" in capsys.readouterr().err
