"""Cluster state storage: embedded etcd or kine."""
import os
from typing import Dict, List, Optional

from pydantic import Field

from ..config import resolve_data_dir
from ..errors import ConfigValidationError
from ..utils.validation import is_ip
from .base import StrictModel

ETCD_STORAGE_TYPE = "etcd"
KINE_STORAGE_TYPE = "kine"
STORAGE_TYPES = (ETCD_STORAGE_TYPE, KINE_STORAGE_TYPE)


class EtcdConfig(StrictModel):
    peer_address: str = Field(default="127.0.0.1", alias="peerAddress")
    extra_args: Dict[str, str] = Field(default_factory=dict, alias="extraArgs")


class KineConfig(StrictModel):
    data_source: str = Field(default="", alias="dataSource")


def default_kine_data_source(data_dir: str) -> str:
    path = os.path.join(resolve_data_dir(data_dir), "db", "state.db")
    return f"sqlite://{path}?mode=rwc&_journal=WAL&cache=shared"


class StorageSpec(StrictModel):
    type: str = ETCD_STORAGE_TYPE
    etcd: Optional[EtcdConfig] = Field(default_factory=EtcdConfig)
    kine: Optional[KineConfig] = None

    def validate_spec(self) -> List[ConfigValidationError]:
        errors = []
        if self.type not in STORAGE_TYPES:
            errors.append(ConfigValidationError(
                f"storage type {self.type!r} is not one of {', '.join(STORAGE_TYPES)}", "type"))
        if self.type == ETCD_STORAGE_TYPE and self.etcd is not None:
            if not is_ip(self.etcd.peer_address):
                errors.append(ConfigValidationError(
                    f"etcd peerAddress {self.etcd.peer_address!r} is not a valid IP address",
                    "etcd.peerAddress"))
        if self.type == KINE_STORAGE_TYPE and (self.kine is None or not self.kine.data_source):
            errors.append(ConfigValidationError(
                "kine storage requires a non-empty dataSource", "kine.dataSource"))
        return errors


def default_storage_spec(data_dir: str = "") -> StorageSpec:
    return StorageSpec(
        type=ETCD_STORAGE_TYPE,
        etcd=EtcdConfig(),
        kine=KineConfig(data_source=default_kine_data_source(data_dir)),
    )
