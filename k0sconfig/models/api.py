"""Kubernetes API server endpoint configuration."""
from typing import Dict, List

from pydantic import Field, model_validator

from ..config import Config
from ..errors import ConfigValidationError
from ..utils.validation import is_dns1123_subdomain, is_ip, is_valid_port
from .base import StrictModel

DEFAULT_API_PORT = 6443
DEFAULT_K0S_API_PORT = 9443


class APISpec(StrictModel):
    """Where and how the API server listens."""
    address: str = Field(default_factory=lambda: Config.API_ADDRESS)
    external_address: str = Field(default="", alias="externalAddress")
    port: int = DEFAULT_API_PORT
    k0s_api_port: int = Field(default=DEFAULT_K0S_API_PORT, alias="k0sApiPort")
    sans: List[str] = Field(default_factory=list)
    extra_args: Dict[str, str] = Field(default_factory=dict, alias="extraArgs")
    tunneled_networking_mode: bool = Field(default=False, alias="tunneledNetworkingMode")

    @model_validator(mode="after")
    def default_sans(self):
        if not self.sans and self.address:
            # bypass validate_assignment to avoid re-running this validator
            object.__setattr__(self, "sans", [self.address])
        return self

    def validate_spec(self) -> List[ConfigValidationError]:
        errors = []
        if not is_ip(self.address):
            errors.append(ConfigValidationError(
                f"address {self.address!r} is not a valid IP address", "address"))
        if self.external_address and not (
            is_ip(self.external_address) or is_dns1123_subdomain(self.external_address)
        ):
            errors.append(ConfigValidationError(
                f"externalAddress {self.external_address!r} is neither an IP address nor a valid DNS name",
                "externalAddress"))
        for name, port in (("port", self.port), ("k0sApiPort", self.k0s_api_port)):
            if not is_valid_port(port):
                errors.append(ConfigValidationError(f"{name} {port} is out of range 1-65535", name))
        for i, san in enumerate(self.sans):
            if not (is_ip(san) or is_dns1123_subdomain(san)):
                errors.append(ConfigValidationError(
                    f"SAN {san!r} is neither an IP address nor a valid DNS name", f"sans[{i}]"))
        return errors


def default_api_spec() -> APISpec:
    return APISpec()
