import pytest

from casdoor_sdk import (
    ApiResponse,
    BusinessError,
    NotFoundError,
    SerializationError,
    Status,
    StatusKind,
    UnknownStatusError,
)
from casdoor_sdk.models import User


@pytest.mark.critical
def test_envelope_round_trip_is_byte_identical():
    raw = '{"data":{"accessKey":"test"},"data2":null,"name":"","status":"ok","msg":"test","sub":""}'
    resp = ApiResponse.from_json(raw)
    assert resp.data == {"accessKey": "test"}
    assert resp.data2 is None
    assert resp.status == Status.ok("test")
    assert resp.to_json() == raw


@pytest.mark.parametrize(
    "wire, status",
    [
        ({"status": "ok", "msg": "test"}, Status.ok("test")),
        ({"status": "error", "msg": "boom"}, Status.error("boom")),
        ({"status": "pending", "msg": "later"}, Status.other("pending", "later")),
    ],
)
def test_status_round_trip(wire, status):
    assert Status.from_dict(wire) == status
    assert status.to_dict() == wire


def test_other_status_keeps_label():
    status = Status.from_dict({"status": "redirect", "msg": ""})
    assert status.kind is StatusKind.OTHER
    assert status.label == "redirect"


def test_missing_status_defaults_to_ok():
    assert Status.from_dict({}) == Status.ok("")


@pytest.mark.critical
def test_into_result_returns_payloads_unchanged():
    resp = ApiResponse.from_dict({"data": [1, 2], "data2": 7, "status": "ok", "msg": ""})
    assert resp.into_result() == ([1, 2], 7)


@pytest.mark.critical
def test_error_status_raises_business_error_with_msg():
    resp = ApiResponse.from_dict({"data": {"ignored": True}, "status": "error", "msg": "user not found"})
    with pytest.raises(BusinessError) as excinfo:
        resp.into_result()
    assert excinfo.value.message == "user not found"
    assert excinfo.value.status_code == 500


def test_error_status_ignores_payload_even_with_decoder():
    # A body that would not decode as a User must not matter on error
    resp = ApiResponse.from_dict({"data": "not-a-user", "status": "error", "msg": "nope"}, User)
    with pytest.raises(BusinessError):
        resp.into_data()


def test_unknown_status_raises_with_label_and_msg():
    resp = ApiResponse.from_dict({"status": "weird", "msg": "hmm"})
    with pytest.raises(UnknownStatusError) as excinfo:
        resp.into_data()
    assert str(excinfo.value) == "Unknown: status=weird, msg=hmm"
    assert excinfo.value.status == "weird"


@pytest.mark.critical
def test_into_data_default_fills_null_payload():
    resp = ApiResponse.from_dict({"data": None, "status": "ok", "msg": ""})
    assert resp.into_data_default(list) == []
    assert resp.into_data_default() == {}
    assert resp.into_data() is None


@pytest.mark.critical
def test_into_data_value_raises_not_found_on_null_payload():
    resp = ApiResponse.from_dict({"data": None, "status": "ok", "msg": ""})
    with pytest.raises(NotFoundError) as excinfo:
        resp.into_data_value()
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Unexpected empty data."


def test_data2_accessors():
    resp = ApiResponse.from_dict({"data": [], "data2": None, "status": "ok", "msg": ""})
    assert resp.into_data2() is None
    assert resp.into_data2_default(int) == 0
    with pytest.raises(NotFoundError, match="Unexpected empty data2."):
        resp.into_data2_value()
    assert resp.into_result_default(list, int) == ([], 0)


def test_decoder_builds_records():
    resp = ApiResponse.from_dict(
        {"data": [{"owner": "built-in", "name": "alice"}], "data2": 1, "status": "ok", "msg": ""},
        [User],
    )
    (user,) = resp.into_data()
    assert isinstance(user, User)
    assert user.id() == "built-in/alice"


def test_invalid_json_raises_serialization_error():
    with pytest.raises(SerializationError) as excinfo:
        ApiResponse.from_json("<html>bad gateway</html>")
    assert excinfo.value.status_code == 500


def test_non_object_envelope_raises_serialization_error():
    with pytest.raises(SerializationError):
        ApiResponse.from_json("[1, 2, 3]")
