"""Cluster networking: CNI provider and address ranges."""
import ipaddress
from typing import List, Optional

from pydantic import Field

from ..errors import ConfigValidationError
from ..utils.validation import is_dns1123_subdomain
from .base import StrictModel

PROVIDERS = ("kuberouter", "calico", "custom")
CALICO_MODES = ("vxlan", "ipip", "bird")


class Calico(StrictModel):
    mode: str = "vxlan"
    vxlan_port: int = Field(default=4789, alias="vxlanPort")
    vxlan_vni: int = Field(default=4096, alias="vxlanVNI")
    mtu: int = 1450
    wireguard: bool = False


class KubeRouter(StrictModel):
    auto_mtu: bool = Field(default=True, alias="autoMTU")
    mtu: int = 0
    peer_router_ips: str = Field(default="", alias="peerRouterIPs")
    peer_router_asns: str = Field(default="", alias="peerRouterASNs")


class Network(StrictModel):
    provider: str = "kuberouter"
    pod_cidr: str = Field(default="10.244.0.0/16", alias="podCIDR")
    service_cidr: str = Field(default="10.96.0.0/12", alias="serviceCIDR")
    cluster_domain: str = Field(default="cluster.local", alias="clusterDomain")
    calico: Optional[Calico] = None
    kuberouter: Optional[KubeRouter] = None

    def validate_spec(self) -> List[ConfigValidationError]:
        errors = []
        if self.provider not in PROVIDERS:
            errors.append(ConfigValidationError(
                f"unsupported network provider {self.provider!r}", "provider"))

        nets = {}
        for field, value in (("podCIDR", self.pod_cidr), ("serviceCIDR", self.service_cidr)):
            try:
                nets[field] = ipaddress.ip_network(value, strict=False)
            except ValueError:
                errors.append(ConfigValidationError(f"invalid {field} {value!r}", field))
        if len(nets) == 2 and nets["podCIDR"].overlaps(nets["serviceCIDR"]):
            errors.append(ConfigValidationError(
                f"podCIDR {self.pod_cidr} overlaps serviceCIDR {self.service_cidr}", "podCIDR"))

        if not is_dns1123_subdomain(self.cluster_domain):
            errors.append(ConfigValidationError(
                f"invalid clusterDomain {self.cluster_domain!r}", "clusterDomain"))

        if self.calico is not None and self.calico.mode not in CALICO_MODES:
            errors.append(ConfigValidationError(
                f"unsupported calico mode {self.calico.mode!r}", "calico.mode"))
        return errors


def default_network() -> Network:
    return Network(kuberouter=KubeRouter())
