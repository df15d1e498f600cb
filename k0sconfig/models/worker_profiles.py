"""Named kubelet configuration overlays for worker nodes."""
from typing import Any, Dict, List

from pydantic import Field, RootModel

from ..errors import ConfigValidationError
from .base import StrictModel

# kubelet settings k0s owns and a profile may not override
LOCKED_FIELDS = ("clusterDNS", "clusterDomain", "apiVersion", "kind", "staticPodURL")


class WorkerProfile(StrictModel):
    name: str = ""
    values: Dict[str, Any] = Field(default_factory=dict)


class WorkerProfiles(RootModel[List[WorkerProfile]]):
    root: List[WorkerProfile] = Field(default_factory=list)

    def __iter__(self):
        return iter(self.root)

    def __len__(self):
        return len(self.root)

    def validate_spec(self) -> List[ConfigValidationError]:
        errors = []
        seen = set()
        for i, profile in enumerate(self.root):
            if not profile.name:
                errors.append(ConfigValidationError("worker profile must have a name", f"[{i}].name"))
            elif profile.name in seen:
                errors.append(ConfigValidationError(
                    f"duplicate worker profile name {profile.name!r}", f"[{i}].name"))
            seen.add(profile.name)
            for field in LOCKED_FIELDS:
                if field in profile.values:
                    errors.append(ConfigValidationError(
                        f"field {field} is locked by k0s and cannot be set in a worker profile",
                        f"[{i}].values.{field}",
                    ))
        return errors
