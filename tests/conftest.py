"""Pytest shared fixtures for the Casdoor SDK tests."""
import datetime
import json
import time
from typing import Optional

import httpx
import jwt
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from casdoor_sdk import CasdoorSDK, Config

ENDPOINT = "http://casdoor.test"
CLIENT_ID = "client-123"
CLIENT_SECRET = "secret-xyz"
ORG = "built-in"
APP = "app-demo"


# ─────────────────────────────────────────────────────────────────────────────
# Keys and certificates
# ─────────────────────────────────────────────────────────────────────────────
def make_certificate(private_key) -> str:
    """Self-signed X.509 certificate (PEM) for the key, like Casdoor's Cert.certificate."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "casdoor-test")])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=365))
        .sign(private_key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM).decode()


def public_key_pem(private_key) -> str:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec256_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec384_key():
    return ec.generate_private_key(ec.SECP384R1())


def make_config(certificate: str = "", **overrides) -> Config:
    values = dict(
        endpoint=ENDPOINT,
        client_id=CLIENT_ID,
        client_secret=CLIENT_SECRET,
        certificate=certificate,
        org_name=ORG,
        app_name=APP,
    )
    values.update(overrides)
    return Config(**values)


@pytest.fixture()
def config(rsa_key):
    return make_config(make_certificate(rsa_key))


# ─────────────────────────────────────────────────────────────────────────────
# JWT helpers
# ─────────────────────────────────────────────────────────────────────────────
def mint_jwt(
    private_key,
    algorithm: str = "RS256",
    audience: Optional[str] = CLIENT_ID,
    exp_offset: int = 3600,
    nbf_offset: int = 0,
    **extra,
) -> str:
    """Sign a Casdoor-shaped token: user fields flattened next to registered claims."""
    now = int(time.time())
    payload = {
        "owner": ORG,
        "name": "alice",
        "displayName": "Alice Doe",
        "email": "alice@example.com",
        "tokenType": "access-token",
        "tag": "staff",
        "scope": "read",
        "iss": ENDPOINT,
        "sub": "3f0c2f5e-uuid",
        "exp": now + exp_offset,
        "nbf": now + nbf_offset,
        "iat": now,
        "jti": "admin/jti-1",
    }
    if audience is not None:
        payload["aud"] = audience
    payload.update(extra)
    return jwt.encode(payload, private_key, algorithm=algorithm)


# ─────────────────────────────────────────────────────────────────────────────
# Casdoor HTTP stub
# ─────────────────────────────────────────────────────────────────────────────
def envelope(data=None, data2=None, status="ok", msg=""):
    return {"data": data, "data2": data2, "name": "", "status": status, "msg": msg, "sub": ""}


class CasdoorStub:
    """Answers requests from canned payloads and records every request.

    Routes are keyed on (method, path); the query string is not part of the key
    so tests assert on it through ``last``.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def reply(self, method: str, path: str, payload, status_code: int = 200):
        self.routes[(method, path)] = (status_code, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            raise RuntimeError(f"Unexpected Casdoor call in test: {request.method} {request.url}")
        status_code, payload = self.routes[key]
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status_code, content=payload)
        return httpx.Response(status_code, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture()
def stub():
    return CasdoorStub()


@pytest.fixture()
def sdk(config, stub):
    return CasdoorSDK(config, transport=stub.transport)
