from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List

from casdoor_sdk.core.models import Model


@dataclass
class Session(Model):
    IDENT: ClassVar[str] = "session"
    SUPPORTS_UPDATE_COLUMNS: ClassVar[bool] = True

    owner: str = ""
    name: str = ""
    application: str = ""
    created_time: str = ""
    session_id: List[str] = field(default_factory=list)

    def get_pk_id(self) -> str:
        """Primary key Casdoor uses for session lookups: ``owner/name/application``."""
        return f"{self.owner}/{self.name}/{self.application}"
