"""Anonymous usage telemetry opt-in."""
from typing import List

from ..errors import ConfigValidationError
from .base import StrictModel


class ClusterTelemetry(StrictModel):
    enabled: bool = True

    def validate_spec(self) -> List[ConfigValidationError]:
        return []


def default_cluster_telemetry() -> ClusterTelemetry:
    return ClusterTelemetry()
