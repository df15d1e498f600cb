"""Pod security policy selection."""
from typing import List

from pydantic import Field

from ..errors import ConfigValidationError
from .base import StrictModel

PRIVILEGED_POLICY = "00-k0s-privileged"
RESTRICTED_POLICY = "99-k0s-restricted"


class PodSecurityPolicy(StrictModel):
    default_policy: str = Field(default=PRIVILEGED_POLICY, alias="defaultPolicy")

    def validate_spec(self) -> List[ConfigValidationError]:
        if self.default_policy not in (PRIVILEGED_POLICY, RESTRICTED_POLICY):
            return [ConfigValidationError(
                f"{self.default_policy} is not a built-in pod security policy, "
                f"use {PRIVILEGED_POLICY} or {RESTRICTED_POLICY}",
                "defaultPolicy",
            )]
        return []


def default_pod_security_policy() -> PodSecurityPolicy:
    return PodSecurityPolicy()
