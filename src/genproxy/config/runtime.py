"""Runtime call index configuration used to SCALE-encode plans.

Pallet and call indices, the ``OriginCaller`` layout and the ``ProxyType``
variant order are properties of the target runtime, so they are read from a
TOML file rather than assumed::

    system_origin = 0
    signed_origin = 1
    multi_address = true

    [calls]
    batch_all = [1, 2]
    dispatch_as = [1, 3]
    add_proxy = [22, 1]
    remove_proxy = [22, 2]
    sudo = [255, 0]

    [proxy_types]
    Any = 0
    NonTransfer = 1
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Annotated, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from genproxy.domain.types import CapabilityTag

from .env import optional_env_var
from .errors import ConfigurationError, MissingConfigurationError

CALL_INDICES_ENV: Final[str] = "GENPROXY_CALL_INDICES"

U8 = Annotated[int, Field(ge=0, le=255)]


class RuntimeModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class CallIndex(RuntimeModel):
    pallet: U8
    call: U8

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, value: object) -> object:
        if isinstance(value, list | tuple) and len(value) == 2:
            pallet, call = value
            return {"pallet": pallet, "call": call}
        return value

    def to_bytes(self) -> bytes:
        return bytes((self.pallet, self.call))


class CallTable(RuntimeModel):
    batch_all: CallIndex
    dispatch_as: CallIndex
    add_proxy: CallIndex
    remove_proxy: CallIndex
    sudo: CallIndex


class RuntimeCallIndices(RuntimeModel):
    calls: CallTable
    proxy_types: dict[CapabilityTag, U8]
    system_origin: U8 = 0
    signed_origin: U8 = 1
    multi_address: bool = True

    def proxy_type_index(self, capability: CapabilityTag) -> int | None:
        return self.proxy_types.get(capability)


def parse_call_indices(document: dict[str, object]) -> RuntimeCallIndices:
    return RuntimeCallIndices.model_validate(document)


def load_call_indices(path: Path | str | None = None) -> RuntimeCallIndices:
    """Load the call index table from ``path`` or ``GENPROXY_CALL_INDICES``."""

    location = path or optional_env_var(CALL_INDICES_ENV)
    if location is None:
        raise MissingConfigurationError(
            f"Missing call index table: pass --call-indices or set {CALL_INDICES_ENV}",
            setting=CALL_INDICES_ENV,
        )
    file_path = Path(location).expanduser()
    try:
        with file_path.open("rb") as handle:
            document = tomllib.load(handle)
    except FileNotFoundError:
        raise ConfigurationError(f"Call index file not found: {file_path}") from None
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {file_path}: {exc}") from exc
    try:
        return parse_call_indices(document)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid call index table in {file_path}: {exc}") from exc
