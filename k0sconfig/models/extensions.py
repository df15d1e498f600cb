"""Helm based cluster extensions: repositories, charts and their settings."""
import logging
from datetime import timedelta
from typing import List, Optional

from pydantic import Field, RootModel, field_serializer, field_validator

from ..errors import ConfigValidationError
from ..utils.duration import format_duration, parse_duration
from ..utils.validation import validate_release_name
from .base import StrictModel, prefixed

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY_LEVEL = 5


class Repository(StrictModel):
    """A single chart repository. Fields map to the flags of ``helm repo add``."""
    name: str = Field(default="", description="The repository name")
    url: str = Field(default="", description="The repository URL")
    insecure: Optional[bool] = Field(
        default=None,
        description="Skip TLS certificate checks when connecting to the repository",
    )
    ca_file: str = Field(default="", alias="caFile", description="CA bundle for HTTPS servers")
    cert_file: str = Field(default="", alias="certFile", description="TLS client certificate")
    key_file: str = Field(default="", alias="keyfile", description="TLS client key")
    username: str = Field(default="", description="Username for basic HTTP authentication")
    password: str = Field(default="", description="Password for basic HTTP authentication")

    def is_insecure(self) -> bool:
        # An unset flag means insecure. The next API version should flip this.
        return self.insecure is None or self.insecure

    def check(self) -> Optional[ConfigValidationError]:
        """Return the first rule this repository breaks, if any."""
        if not self.name:
            return ConfigValidationError("repository must have Name field not empty", "name")
        if not self.url:
            return ConfigValidationError("repository must have URL field not empty", "url")
        return None


def is_insecure(repository: Optional[Repository]) -> bool:
    """``Repository.is_insecure`` that also accepts a missing repository."""
    return repository is None or repository.is_insecure()


class Chart(StrictModel):
    """A single Helm chart to install as a release."""
    name: str = Field(default="", description="Release name")
    chart_name: str = Field(default="", alias="chartname", description="Chart reference")
    version: str = Field(default="", description="Chart version, empty means latest")
    values: str = Field(default="", description="Inline values YAML")
    target_ns: str = Field(default="", alias="namespace", description="Target namespace")
    timeout: timedelta = Field(
        default=timedelta(0),
        description="How long to wait for the install to finish, zero means installer default",
    )
    disable_force_upgrade: bool = Field(
        default=False,
        alias="disableForceUpgrade",
        description="Do not pass --force when upgrading the release",
    )
    order: int = Field(default=0, description="Install ordering key")

    @field_validator("timeout", mode="before")
    @classmethod
    def parse_timeout(cls, v):
        if v is None:
            return timedelta(0)
        return parse_duration(v)

    @field_serializer("timeout")
    def serialize_timeout(self, v: timedelta) -> str:
        return format_duration(v)

    def check(self) -> Optional[ConfigValidationError]:
        """Return the first rule this chart breaks, if any.

        Checks run in a fixed order: name, release-name syntax, chart name, namespace.
        """
        if not self.name:
            return ConfigValidationError("chart must have Name field not empty", "name")
        err = validate_release_name(self.name)
        if err is not None:
            return err
        if not self.chart_name:
            return ConfigValidationError("chart must have ChartName field not empty", "chartname")
        if not self.target_ns:
            return ConfigValidationError("chart must have TargetNS field not empty", "namespace")
        return None


class RepositoriesSettings(RootModel[List[Repository]]):
    root: List[Repository] = Field(default_factory=list)

    def __iter__(self):
        return iter(self.root)

    def __len__(self):
        return len(self.root)

    def __getitem__(self, item):
        return self.root[item]

    def validate_spec(self) -> List[ConfigValidationError]:
        errors = []
        for i, repository in enumerate(self.root):
            err = repository.check()
            if err is not None:
                errors.extend(prefixed(f"[{i}]", [err]))
        return errors


class ChartsSettings(RootModel[List[Chart]]):
    root: List[Chart] = Field(default_factory=list)

    def __iter__(self):
        return iter(self.root)

    def __len__(self):
        return len(self.root)

    def __getitem__(self, item):
        return self.root[item]

    def validate_spec(self) -> List[ConfigValidationError]:
        errors = []
        for i, chart in enumerate(self.root):
            err = chart.check()
            if err is not None:
                errors.extend(prefixed(f"[{i}]", [err]))
        return errors


class HelmExtensions(StrictModel):
    """Settings for Helm based cluster extensions."""
    concurrency_level: int = Field(
        default=DEFAULT_CONCURRENCY_LEVEL,
        alias="concurrencyLevel",
        description="How many charts may be installed at the same time",
    )
    repositories: RepositoriesSettings = Field(default_factory=RepositoriesSettings)
    charts: ChartsSettings = Field(default_factory=ChartsSettings)

    @field_validator("concurrency_level", mode="before")
    @classmethod
    def default_concurrency(cls, v):
        if isinstance(v, bool):
            raise ValueError(f"concurrencyLevel must be an integer, got {v!r}")
        # zero and null mean "unset"
        if v is None or v == 0:
            return DEFAULT_CONCURRENCY_LEVEL
        return v

    @field_validator("repositories", "charts", mode="before")
    @classmethod
    def default_lists(cls, v):
        return [] if v is None else v

    def validate_spec(self) -> List[ConfigValidationError]:
        errors = []
        if self.concurrency_level < 0:
            errors.append(ConfigValidationError(
                f"concurrencyLevel must not be negative, got {self.concurrency_level}",
                "concurrencyLevel",
            ))
        errors.extend(prefixed("repositories", self.repositories.validate_spec()))
        errors.extend(prefixed("charts", self.charts.validate_spec()))
        return errors


class StorageExtension(StrictModel):
    """Deprecated no-op, kept so old documents still decode."""
    type: str = ""
    create_default_storage_class: bool = False


class ClusterExtensions(StrictModel):
    """Cluster extensions. An absent block means no extensions were requested."""
    storage: Optional[StorageExtension] = Field(
        default=None,
        description="Deprecated: ignored, see https://docs.k0sproject.io/stable/examples/openebs",
    )
    helm: Optional[HelmExtensions] = None

    @field_validator("storage")
    @classmethod
    def warn_storage(cls, v):
        if v is not None:
            logger.warning("extensions.storage is deprecated and will be ignored")
        return v

    def validate_spec(self) -> List[ConfigValidationError]:
        if self.helm is None:
            return []
        return prefixed("helm", self.helm.validate_spec())


def default_extensions() -> ClusterExtensions:
    return ClusterExtensions(helm=HelmExtensions(concurrency_level=DEFAULT_CONCURRENCY_LEVEL))
