"""Shared base class and the validation capability for configuration models."""
from typing import List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from ..errors import ConfigValidationError


class StrictModel(BaseModel):
    """Base for every schema node: camelCase aliases, unknown fields rejected."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        validate_assignment=True,
    )


@runtime_checkable
class Validatable(Protocol):
    """Anything that can check itself and report every rule violation."""

    def validate_spec(self) -> List[ConfigValidationError]:
        ...


def validate_specs(spec: Optional[Validatable]) -> List[ConfigValidationError]:
    """Run ``spec.validate_spec()``; an absent component has nothing to report."""
    if spec is None:
        return []
    return list(spec.validate_spec())


def prefixed(prefix: str, errors: List[ConfigValidationError]) -> List[ConfigValidationError]:
    """Re-root field paths of ``errors`` under ``prefix``."""
    out = []
    for err in errors:
        if not err.field:
            field = prefix
        elif err.field.startswith("["):
            field = f"{prefix}{err.field}"
        else:
            field = f"{prefix}.{err.field}"
        out.append(type(err)(err.message, field))
    return out
