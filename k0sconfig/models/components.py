"""Extra arguments for the controller manager and scheduler processes."""
from typing import Dict, List

from pydantic import Field

from ..errors import ConfigValidationError
from .base import StrictModel


class ControllerManagerSpec(StrictModel):
    """Extra arguments passed to the Kubernetes controller manager."""
    extra_args: Dict[str, str] = Field(default_factory=dict, alias="extraArgs")

    def is_zero(self) -> bool:
        return len(self.extra_args) == 0

    def validate_spec(self) -> List[ConfigValidationError]:
        return []


class SchedulerSpec(StrictModel):
    """Extra arguments passed to the Kubernetes scheduler."""
    extra_args: Dict[str, str] = Field(default_factory=dict, alias="extraArgs")

    def is_zero(self) -> bool:
        return len(self.extra_args) == 0

    def validate_spec(self) -> List[ConfigValidationError]:
        return []
