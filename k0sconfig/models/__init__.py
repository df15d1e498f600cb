"""Schema models for the k0s.k0sproject.io/v1beta1 ClusterConfig document."""
from .api import APISpec, default_api_spec
from .base import StrictModel, Validatable, validate_specs
from .cluster import (
    API_VERSION,
    KIND,
    ClusterConfig,
    ClusterConfigList,
    ClusterConfigStatus,
    ClusterSpec,
    ObjectMeta,
    default_cluster_config,
    default_cluster_spec,
    validate,
)
from .components import ControllerManagerSpec, SchedulerSpec
from .extensions import (
    Chart,
    ChartsSettings,
    ClusterExtensions,
    HelmExtensions,
    RepositoriesSettings,
    Repository,
    StorageExtension,
    default_extensions,
    is_insecure,
)
from .images import ClusterImages, ImageSpec, default_cluster_images
from .install import InstallSpec, SystemUser, default_install_spec
from .konnectivity import KonnectivitySpec, default_konnectivity_spec
from .network import Calico, KubeRouter, Network, default_network
from .psp import PodSecurityPolicy, default_pod_security_policy
from .storage import EtcdConfig, KineConfig, StorageSpec, default_storage_spec
from .telemetry import ClusterTelemetry, default_cluster_telemetry
from .worker_profiles import WorkerProfile, WorkerProfiles
