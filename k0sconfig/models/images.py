"""Container images used by the cluster's system components."""
from typing import List, Tuple

from pydantic import Field

from ..errors import ConfigValidationError
from ..utils.validation import is_image_version
from .base import StrictModel

PULL_POLICIES = ("Always", "Never", "IfNotPresent")


class ImageSpec(StrictModel):
    image: str
    version: str

    def validate_spec(self) -> List[ConfigValidationError]:
        errors = []
        if not self.image:
            errors.append(ConfigValidationError("image must not be empty", "image"))
        if not is_image_version(self.version):
            errors.append(ConfigValidationError(
                f"{self.version!r} is not a valid image version", "version"))
        return errors


class CalicoImageSpec(StrictModel):
    cni: ImageSpec = Field(default_factory=lambda: ImageSpec(
        image="quay.io/k0sproject/calico-cni", version="v3.25.1-0"))
    node: ImageSpec = Field(default_factory=lambda: ImageSpec(
        image="quay.io/k0sproject/calico-node", version="v3.25.1-0"))
    kube_controllers: ImageSpec = Field(alias="kubecontrollers", default_factory=lambda: ImageSpec(
        image="quay.io/k0sproject/calico-kube-controllers", version="v3.25.1-0"))


class KubeRouterImageSpec(StrictModel):
    cni: ImageSpec = Field(default_factory=lambda: ImageSpec(
        image="quay.io/k0sproject/kube-router", version="v1.5.1-iptables1.8.9-0"))
    cni_installer: ImageSpec = Field(alias="cniInstaller", default_factory=lambda: ImageSpec(
        image="quay.io/k0sproject/cni-node", version="1.1.1-k0s.0"))


class ClusterImages(StrictModel):
    konnectivity: ImageSpec = Field(default_factory=lambda: ImageSpec(
        image="quay.io/k0sproject/apiserver-network-proxy-agent", version="v0.1.2"))
    metrics_server: ImageSpec = Field(alias="metricsserver", default_factory=lambda: ImageSpec(
        image="registry.k8s.io/metrics-server/metrics-server", version="v0.6.3"))
    kube_proxy: ImageSpec = Field(alias="kubeproxy", default_factory=lambda: ImageSpec(
        image="registry.k8s.io/kube-proxy", version="v1.27.2"))
    core_dns: ImageSpec = Field(alias="coredns", default_factory=lambda: ImageSpec(
        image="registry.k8s.io/coredns/coredns", version="v1.10.1"))
    pause: ImageSpec = Field(default_factory=lambda: ImageSpec(
        image="registry.k8s.io/pause", version="3.9"))
    calico: CalicoImageSpec = Field(default_factory=CalicoImageSpec)
    kube_router: KubeRouterImageSpec = Field(alias="kuberouter", default_factory=KubeRouterImageSpec)

    repository: str = ""
    default_pull_policy: str = "IfNotPresent"

    def _images(self) -> List[Tuple[str, ImageSpec]]:
        return [
            ("konnectivity", self.konnectivity),
            ("metricsserver", self.metrics_server),
            ("kubeproxy", self.kube_proxy),
            ("coredns", self.core_dns),
            ("pause", self.pause),
            ("calico.cni", self.calico.cni),
            ("calico.node", self.calico.node),
            ("calico.kubecontrollers", self.calico.kube_controllers),
            ("kuberouter.cni", self.kube_router.cni),
            ("kuberouter.cniInstaller", self.kube_router.cni_installer),
        ]

    def validate_spec(self) -> List[ConfigValidationError]:
        errors = []
        if self.default_pull_policy not in PULL_POLICIES:
            errors.append(ConfigValidationError(
                f"default_pull_policy must be one of {', '.join(PULL_POLICIES)}, "
                f"got {self.default_pull_policy!r}",
                "default_pull_policy",
            ))
        for name, image in self._images():
            for err in image.validate_spec():
                errors.append(ConfigValidationError(err.message, f"{name}.{err.field}"))
        return errors


def default_cluster_images() -> ClusterImages:
    return ClusterImages()
