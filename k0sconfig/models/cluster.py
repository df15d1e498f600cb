"""The ClusterConfig document and the ClusterSpec aggregate it carries."""
import logging
from typing import Any, Dict, List, Optional

import yaml
from pydantic import Field, field_validator

from ..errors import ConfigValidationError
from .api import APISpec, default_api_spec
from .base import StrictModel, prefixed, validate_specs
from .components import ControllerManagerSpec, SchedulerSpec
from .extensions import ClusterExtensions, default_extensions
from .images import ClusterImages, default_cluster_images
from .install import InstallSpec, default_install_spec
from .konnectivity import KonnectivitySpec, default_konnectivity_spec
from .network import Network, default_network
from .psp import PodSecurityPolicy, default_pod_security_policy
from .storage import StorageSpec, default_storage_spec
from .telemetry import ClusterTelemetry, default_cluster_telemetry
from .worker_profiles import WorkerProfiles

logger = logging.getLogger(__name__)

API_VERSION = "k0s.k0sproject.io/v1beta1"
KIND = "ClusterConfig"
LIST_KIND = "ClusterConfigList"
DEFAULT_NAME = "k0s"
# a null identity key keeps its default
IDENTITY_KEYS = ("apiVersion", "kind", "metadata")


class ObjectMeta(StrictModel):
    name: str = ""
    generate_name: str = Field(default="", alias="generateName")
    namespace: str = ""
    uid: str = ""
    resource_version: str = Field(default="", alias="resourceVersion")
    generation: int = 0
    creation_timestamp: Optional[str] = Field(default=None, alias="creationTimestamp")
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)
    finalizers: List[str] = Field(default_factory=list)


class ListMeta(StrictModel):
    resource_version: str = Field(default="", alias="resourceVersion")
    continue_: str = Field(default="", alias="continue")


class ClusterConfigStatus(StrictModel):
    """Observed state. Nothing is tracked yet."""
    pass


class ClusterSpec(StrictModel):
    """Desired state of the cluster.

    Every sub-spec except ``extensions`` is filled with its default when the
    document leaves it out. A missing ``extensions`` block means no
    extensions were requested.
    """
    api: Optional[APISpec] = Field(default_factory=default_api_spec)
    controller_manager: Optional[ControllerManagerSpec] = Field(
        default_factory=ControllerManagerSpec, alias="controllerManager")
    scheduler: Optional[SchedulerSpec] = Field(default_factory=SchedulerSpec)
    storage: Optional[StorageSpec] = Field(default_factory=default_storage_spec)
    network: Optional[Network] = Field(default_factory=default_network)
    pod_security_policy: Optional[PodSecurityPolicy] = Field(
        default_factory=default_pod_security_policy, alias="podSecurityPolicy")
    worker_profiles: WorkerProfiles = Field(default_factory=WorkerProfiles, alias="workerProfiles")
    telemetry: Optional[ClusterTelemetry] = Field(default_factory=default_cluster_telemetry)
    install: Optional[InstallSpec] = Field(default_factory=default_install_spec, alias="installConfig")
    images: Optional[ClusterImages] = Field(default_factory=default_cluster_images)
    extensions: Optional[ClusterExtensions] = None
    konnectivity: Optional[KonnectivitySpec] = Field(default_factory=default_konnectivity_spec)

    @field_validator("worker_profiles", mode="before")
    @classmethod
    def default_worker_profiles(cls, v):
        return [] if v is None else v

    def validate_spec(self) -> List[ConfigValidationError]:
        """Validate every sub-spec and return all errors, in a fixed order."""
        components = [
            ("api", self.api),
            ("controllerManager", self.controller_manager),
            ("scheduler", self.scheduler),
            ("storage", self.storage),
            ("network", self.network),
            ("podSecurityPolicy", self.pod_security_policy),
            ("workerProfiles", self.worker_profiles),
            ("telemetry", self.telemetry),
            ("installConfig", self.install),
            ("extensions", self.extensions),
            ("konnectivity", self.konnectivity),
        ]
        errors = []
        for name, component in components:
            errors.extend(prefixed(name, validate_specs(component)))
        return errors


def default_cluster_spec(data_dir: str = "") -> ClusterSpec:
    """Return a ClusterSpec with every always-defaulted sub-spec populated."""
    return ClusterSpec(
        storage=default_storage_spec(data_dir),
        network=default_network(),
        api=default_api_spec(),
        controller_manager=ControllerManagerSpec(extra_args={}),
        scheduler=SchedulerSpec(extra_args={}),
        pod_security_policy=default_pod_security_policy(),
        install=default_install_spec(),
        images=default_cluster_images(),
        telemetry=default_cluster_telemetry(),
        konnectivity=default_konnectivity_spec(),
    )


class ClusterConfig(StrictModel):
    """The root configuration document."""
    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: str = KIND
    metadata: ObjectMeta = Field(default_factory=lambda: ObjectMeta(name=DEFAULT_NAME))
    data_dir: str = Field(default="", alias="dataDir")
    spec: Optional[ClusterSpec] = Field(default_factory=default_cluster_spec)
    status: ClusterConfigStatus = Field(default_factory=ClusterConfigStatus)

    @classmethod
    def unmarshal(cls, payload: Dict[str, Any], data_dir: str = "") -> "ClusterConfig":
        """Build a ClusterConfig from a decoded document, layered over defaults.

        Values present in ``payload`` win. ``metadata`` is merged key by key and
        every sub-spec present under ``spec`` replaces its default counterpart.
        Raises ``pydantic.ValidationError`` on unknown or malformed fields.
        """
        return cls.model_validate(layer_defaults(payload, data_dir), by_alias=True, by_name=False)

    def validate_spec(self) -> List[ConfigValidationError]:
        if self.spec is None:
            return [ConfigValidationError("spec must not be empty", "spec")]
        return prefixed("spec", self.spec.validate_spec())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize by alias, leaving out unset and empty sections."""
        data = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        if self.spec is not None:
            spec = data["spec"]
            if self.spec.controller_manager is not None and self.spec.controller_manager.is_zero():
                spec.pop("controllerManager", None)
            if self.spec.scheduler is not None and self.spec.scheduler.is_zero():
                spec.pop("scheduler", None)
            if not self.spec.worker_profiles.root:
                spec.pop("workerProfiles", None)
        if not data.get("status"):
            data.pop("status", None)
        return data

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)


class ClusterConfigList(StrictModel):
    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: str = LIST_KIND
    metadata: ListMeta = Field(default_factory=ListMeta)
    items: List[ClusterConfig] = Field(default_factory=list)

    @classmethod
    def unmarshal(cls, payload: Dict[str, Any], data_dir: str = "") -> "ClusterConfigList":
        merged = dict(payload)
        items = payload.get("items")
        if isinstance(items, list):
            merged["items"] = [
                layer_defaults(item, data_dir) if isinstance(item, dict) else item
                for item in items
            ]
        merged.setdefault("apiVersion", API_VERSION)
        merged.setdefault("kind", LIST_KIND)
        return cls.model_validate(merged, by_alias=True, by_name=False)


def default_cluster_config(data_dir: str = "") -> ClusterConfig:
    """Return the full default document."""
    return ClusterConfig(
        metadata=ObjectMeta(name=DEFAULT_NAME),
        api_version=API_VERSION,
        kind=KIND,
        data_dir=data_dir,
        spec=default_cluster_spec(data_dir),
    )


def layer_defaults(payload: Dict[str, Any], data_dir: str = "") -> Dict[str, Any]:
    """Merge a decoded document over the default document, as plain mappings.

    ``payload`` is not modified.
    """
    doc_data_dir = payload.get("dataDir")
    if isinstance(doc_data_dir, str) and doc_data_dir:
        data_dir = doc_data_dir
    logger.debug("Layering document over defaults for data dir %r", data_dir)

    merged = default_cluster_config(data_dir).to_dict()
    merged["dataDir"] = ""

    for key, value in payload.items():
        if key in IDENTITY_KEYS and value is None:
            continue
        if key == "metadata" and isinstance(value, dict):
            merged[key] = {**merged[key], **value}
        elif key == "spec" and isinstance(value, dict):
            spec = {**merged[key], **value}
            extensions = value.get("extensions")
            if isinstance(extensions, dict) and extensions.get("helm") is None:
                spec["extensions"] = {
                    **extensions,
                    "helm": default_extensions().helm.model_dump(by_alias=True, mode="json"),
                }
            merged[key] = spec
        else:
            merged[key] = value
    return merged


def validate(config: ClusterConfig) -> List[ConfigValidationError]:
    """Validate ``config`` and return every error found; an empty list means valid."""
    return config.validate_spec()
