"""Settings consumed by the ``k0s install`` command."""
from typing import List, Optional

from pydantic import Field

from ..errors import ConfigValidationError
from .base import StrictModel


class SystemUser(StrictModel):
    """Unix users the control plane components run as."""
    etcd_user: str = Field(default="etcd", alias="etcdUser")
    kine_user: str = Field(default="kube-apiserver", alias="kineUser")
    konnectivity_user: str = Field(default="konnectivity-server", alias="konnectivityUser")
    kube_api_server_user: str = Field(default="kube-apiserver", alias="kubeAPIserverUser")
    kube_scheduler_user: str = Field(default="kube-scheduler", alias="kubeSchedulerUser")


class InstallSpec(StrictModel):
    system_users: Optional[SystemUser] = Field(default=None, alias="users")

    def validate_spec(self) -> List[ConfigValidationError]:
        return []


def default_install_spec() -> InstallSpec:
    return InstallSpec(system_users=SystemUser())
