"""Error types raised or returned while loading and validating cluster configs."""
from typing import Any, List, Optional, Tuple


class ConfigError(Exception):
    """Base class for every configuration error."""
    pass


class ConfigIOError(ConfigError):
    """The configuration source could not be read."""

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source


class ConfigDecodeError(ConfigError):
    """The document is malformed or carries fields the schema does not know.

    ``config`` holds a best-effort, partially populated ``ClusterConfig`` so the
    caller still has whatever could be decoded.
    """

    def __init__(
        self,
        message: str,
        field_errors: Optional[List[Tuple[str, str]]] = None,
        config: Any = None,
    ):
        super().__init__(message)
        self.field_errors = field_errors or []
        self.config = config


class ConfigValidationError(ConfigError):
    """A single rule violation. Returned in lists, never raised by validation."""

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field
        self.message = message

    def __eq__(self, other):
        if not isinstance(other, ConfigValidationError):
            return NotImplemented
        return type(self) is type(other) and (self.field, self.message) == (other.field, other.message)

    def __hash__(self):
        return hash((type(self), self.field, self.message))

    def __repr__(self):
        return f"{type(self).__name__}(field={self.field!r}, message={self.message!r})"


class ReleaseNameError(ConfigValidationError):
    """A chart release name does not match the release-name syntax."""
    pass
