"""Loading ClusterConfig documents from files, strings and standard input.

Decoding is strict: fields the schema does not know are rejected, except for
the names in ``IGNORED_FIELDS`` which are dropped wherever they appear.
"""
import logging
import sys
from pathlib import Path
from typing import Any, Dict, TextIO, Union

from pydantic import ValidationError

from .errors import ConfigDecodeError, ConfigIOError
from .models.cluster import (
    ClusterConfig,
    ClusterSpec,
    default_cluster_config,
    default_cluster_spec,
    layer_defaults,
)
from .utils.strict import load_document, unmarshal_strict

logger = logging.getLogger(__name__)

IGNORED_FIELDS = ("interval",)


def config_from_file(filename: Union[str, Path], data_dir: str = "") -> ClusterConfig:
    """Read and decode the config file at ``filename``.

    Raises:
        ConfigIOError: if the file cannot be read
        ConfigDecodeError: if the document is malformed or has unknown fields
    """
    path = Path(filename)
    logger.debug("Reading cluster config from %s", path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigIOError(str(path), f"failed to read config file at {path}: {e}") from e
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise _encoding_error(str(path), e, data_dir) from e
    return config_from_string(text, data_dir)


def config_from_stdin(data_dir: str = "", stream: TextIO = None) -> ClusterConfig:
    """Read and decode a config document from standard input."""
    stream = stream if stream is not None else sys.stdin
    logger.debug("Reading cluster config from stdin")
    try:
        text = stream.read()
    except UnicodeDecodeError as e:
        raise _encoding_error("stdin", e, data_dir) from e
    except (OSError, ValueError) as e:
        raise ConfigIOError("stdin", f"can't read configuration from stdin: {e}") from e
    return config_from_string(text, data_dir)


def config_from_string(text: str, data_dir: str = "") -> ClusterConfig:
    """Decode a YAML or JSON document into a fully defaulted ClusterConfig.

    On a decode error the raised ``ConfigDecodeError`` carries a partially
    populated config in its ``config`` attribute.
    """
    try:
        data = load_document(text)
    except ConfigDecodeError as e:
        e.config = default_cluster_config(data_dir)
        raise

    try:
        config = unmarshal_strict(
            data,
            lambda payload: ClusterConfig.unmarshal(payload, data_dir),
            IGNORED_FIELDS,
        )
    except ConfigDecodeError as e:
        e.config = partial_config(data, data_dir)
        raise

    if config.spec is None:
        logger.info("No spec section in config, using defaults")
        config.spec = default_cluster_spec(config.data_dir or data_dir)
    return config


def _encoding_error(source: str, error: UnicodeDecodeError, data_dir: str) -> ConfigDecodeError:
    return ConfigDecodeError(
        f"config from {source} is not valid UTF-8: {error}",
        config=default_cluster_config(data_dir),
    )


def partial_config(data: Dict[str, Any], data_dir: str = "") -> ClusterConfig:
    """Best-effort decode that keeps every section that decodes on its own."""
    merged = layer_defaults(data, data_dir)
    config = default_cluster_config(data_dir)
    config.data_dir = ""

    for name, field in ClusterConfig.model_fields.items():
        key = field.alias or name
        if name == "spec" or key not in data:
            continue
        try:
            setattr(config, name, merged[key])
        except ValidationError:
            logger.debug("Dropping undecodable section %s", key)

    spec_data = merged.get("spec")
    if not isinstance(spec_data, dict):
        return config
    for name, field in ClusterSpec.model_fields.items():
        key = field.alias or name
        if key not in spec_data:
            continue
        try:
            setattr(config.spec, name, spec_data[key])
        except ValidationError:
            logger.debug("Dropping undecodable section spec.%s", key)
    return config
