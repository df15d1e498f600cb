"""Parse, default and validate k0s ClusterConfig documents."""
from .errors import (
    ConfigDecodeError,
    ConfigError,
    ConfigIOError,
    ConfigValidationError,
    ReleaseNameError,
)
from .loader import IGNORED_FIELDS, config_from_file, config_from_stdin, config_from_string
from .models import ClusterConfig, ClusterSpec, default_cluster_config, default_cluster_spec, validate
from .registry import Scheme, add_to_scheme

__version__ = "0.1.0"
