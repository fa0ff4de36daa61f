from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from casdoor_sdk.core.models import Model


@dataclass
class Cert(Model):
    """A signing certificate as stored by Casdoor.

    ``certificate`` is the PEM an application hands to ``Config.certificate``
    to verify the JWTs it receives.
    """

    IDENT: ClassVar[str] = "cert"

    owner: str = ""
    name: str = ""
    created_time: str = ""
    display_name: str = ""
    scope: str = ""
    type_: str = ""
    crypto_algorithm: str = ""
    bit_size: int = 0
    expire_in_years: int = 0
    certificate: str = ""
    private_key: str = field(default="", repr=False)
    authority_public_key: str = ""
    authority_root_public_key: str = ""
