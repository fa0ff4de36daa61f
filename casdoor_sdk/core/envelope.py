"""Casdoor response envelope and result resolution.

Every Casdoor endpoint answers with the same JSON wrapper::

    {"data": ..., "data2": ..., "name": "", "status": "ok", "msg": "", "sub": ""}

``status`` decides whether the payload slots mean anything. The resolver
methods on ``ApiResponse`` turn the envelope into payloads or raise a typed
``CasdoorError``; call sites pick the flavour that matches the endpoint:

- ``into_data()``          keep the ``None`` (lookup that may legitimately miss)
- ``into_data_default()``  replace ``None`` with an empty value (lists, counts)
- ``into_data_value()``    raise ``NotFoundError`` when the payload is absent
"""
from __future__ import annotations

import inspect
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

from .exceptions import BusinessError, NotFoundError, SerializationError, UnknownStatusError
from .models import Record

D = TypeVar("D")
D2 = TypeVar("D2")


class StatusKind(str, Enum):
    OK = "ok"
    ERR = "error"
    OTHER = "other"


@dataclass(frozen=True)
class Status:
    """Tagged union over the envelope's sibling ``status``/``msg`` keys.

    ``label`` keeps the raw status string so an unrecognised one can be
    reported as-is.
    """

    kind: StatusKind
    msg: str = ""
    label: str = "ok"

    @classmethod
    def ok(cls, msg: str = "") -> "Status":
        return cls(StatusKind.OK, msg, "ok")

    @classmethod
    def error(cls, msg: str = "") -> "Status":
        return cls(StatusKind.ERR, msg, "error")

    @classmethod
    def other(cls, label: str, msg: str = "") -> "Status":
        return cls(StatusKind.OTHER, msg, label)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Status":
        label = payload.get("status")
        msg = payload.get("msg") or ""
        if label is None or label == "ok":
            return cls.ok(msg)
        if label == "error":
            return cls.error(msg)
        return cls.other(str(label), msg)

    def to_dict(self) -> Dict[str, str]:
        return {"status": self.label, "msg": self.msg}

    @property
    def is_ok(self) -> bool:
        return self.kind is StatusKind.OK


Decoder = Any  # None, a Record subclass, [decoder] for lists, or any callable


def decode_with(decoder: Decoder, value: Any) -> Any:
    """Decode one payload slot. ``None`` payloads stay ``None``."""
    if value is None or decoder is None:
        return value
    if isinstance(decoder, list):
        (item_decoder,) = decoder
        return [decode_with(item_decoder, item) for item in value]
    if inspect.isclass(decoder) and issubclass(decoder, Record):
        return decoder.from_dict(value)
    return decoder(value)


def _encode_slot(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, list):
        return [_encode_slot(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass
class ApiResponse(Generic[D, D2]):
    """Decoded Casdoor envelope."""

    data: Optional[D] = None
    data2: Optional[D2] = None
    name: str = ""
    status: Status = field(default_factory=Status.ok)
    sub: str = ""

    @classmethod
    def from_dict(
        cls,
        payload: Dict[str, Any],
        data_type: Decoder = None,
        data2_type: Decoder = None,
    ) -> "ApiResponse":
        """Decode an envelope; payload slots go through the optional decoders.

        Raises:
            SerializationError: If the envelope or a payload slot has the wrong shape
        """
        if not isinstance(payload, dict):
            raise SerializationError(
                f"Expected a JSON object envelope, got {type(payload).__name__}", 500
            )
        status = Status.from_dict(payload)
        data, data2 = payload.get("data"), payload.get("data2")
        if status.is_ok:
            try:
                data = decode_with(data_type, data)
                data2 = decode_with(data2_type, data2)
            except (TypeError, ValueError, KeyError, AttributeError) as exc:
                raise SerializationError(f"Unexpected payload shape: {exc}", 500) from exc
        return cls(
            data=data,
            data2=data2,
            name=payload.get("name") or "",
            status=status,
            sub=payload.get("sub") or "",
        )

    @classmethod
    def from_json(cls, text: str | bytes, data_type: Decoder = None, data2_type: Decoder = None) -> "ApiResponse":
        try:
            payload = json.loads(text)
        except ValueError as exc:
            raise SerializationError(f"Response is not valid JSON: {exc}", 500) from exc
        return cls.from_dict(payload, data_type, data2_type)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": _encode_slot(self.data),
            "data2": _encode_slot(self.data2),
            "name": self.name,
            **self.status.to_dict(),
            "sub": self.sub,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    # ─────────────────────────────────────────────────────────────────────
    # Resolution
    # ─────────────────────────────────────────────────────────────────────
    def into_result(self) -> Tuple[Optional[D], Optional[D2]]:
        """Return both payload slots, or raise for a non-ok status.

        Raises:
            BusinessError: status is "error"; message is the envelope's msg
            UnknownStatusError: any other status label
        """
        if self.status.kind is StatusKind.OK:
            return self.data, self.data2
        if self.status.kind is StatusKind.ERR:
            raise BusinessError(self.status.msg)
        raise UnknownStatusError(self.status.label, self.status.msg)

    def into_result_default(
        self,
        default: Callable[[], D] = dict,
        default2: Callable[[], D2] = dict,
    ) -> Tuple[D, D2]:
        data, data2 = self.into_result()
        return (
            default() if data is None else data,
            default2() if data2 is None else data2,
        )

    def into_data(self) -> Optional[D]:
        return self.into_result()[0]

    def into_data_value(self) -> D:
        data = self.into_data()
        if data is None:
            raise NotFoundError("Unexpected empty data.")
        return data

    def into_data_default(self, default: Callable[[], D] = dict) -> D:
        data = self.into_data()
        return default() if data is None else data

    def into_data2(self) -> Optional[D2]:
        return self.into_result()[1]

    def into_data2_value(self) -> D2:
        data2 = self.into_data2()
        if data2 is None:
            raise NotFoundError("Unexpected empty data2.")
        return data2

    def into_data2_default(self, default: Callable[[], D2] = dict) -> D2:
        data2 = self.into_data2()
        return default() if data2 is None else data2
