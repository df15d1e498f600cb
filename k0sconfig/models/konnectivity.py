"""Konnectivity tunnel between control plane and workers."""
from typing import List

from pydantic import Field

from ..errors import ConfigValidationError
from ..utils.validation import is_valid_port
from .base import StrictModel


class KonnectivitySpec(StrictModel):
    admin_port: int = Field(default=8133, alias="adminPort")
    agent_port: int = Field(default=8132, alias="agentPort")

    def validate_spec(self) -> List[ConfigValidationError]:
        errors = []
        for name, port in (("adminPort", self.admin_port), ("agentPort", self.agent_port)):
            if not is_valid_port(port):
                errors.append(ConfigValidationError(f"{name} {port} is out of range 1-65535", name))
        if self.admin_port == self.agent_port:
            errors.append(ConfigValidationError(
                f"adminPort and agentPort must differ, both are {self.agent_port}", "agentPort"))
        return errors


def default_konnectivity_spec() -> KonnectivitySpec:
    return KonnectivitySpec()
