"""Strict YAML/JSON decoding with an allowlist of tolerated fields."""
import logging
from typing import Any, Callable, Dict, Iterable, List, Tuple, TypeVar

import yaml
from pydantic import ValidationError

from ..errors import ConfigDecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_document(text: str) -> Dict[str, Any]:
    """Parse ``text`` as YAML (JSON is a subset) and return the root mapping."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigDecodeError(f"failed to parse document: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigDecodeError(
            f"document root must be a mapping, got {type(data).__name__}"
        )
    return data


def format_loc(loc: Iterable[Any]) -> str:
    """Render a pydantic error location as a dotted path (``spec.api.port``)."""
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out


def field_errors(error: ValidationError) -> List[Tuple[str, str]]:
    return [(format_loc(e["loc"]), e["msg"]) for e in error.errors()]


def _drop(data: Any, loc: Tuple[Any, ...]) -> bool:
    node = data
    for part in loc[:-1]:
        try:
            node = node[part]
        except (KeyError, IndexError, TypeError):
            return False
    if isinstance(node, dict) and loc[-1] in node:
        del node[loc[-1]]
        return True
    return False


def unmarshal_strict(
    data: Dict[str, Any],
    build: Callable[[Dict[str, Any]], T],
    ignore_fields: Iterable[str] = (),
) -> T:
    """Build a model from ``data``, rejecting unknown fields.

    Unknown fields whose name is in ``ignore_fields`` are dropped wherever they
    appear and the build is retried. Any other error is raised as a
    ``ConfigDecodeError``. ``data`` is modified in place when fields are dropped.
    """
    ignore = set(ignore_fields)
    try:
        return build(data)
    except ValidationError as e:
        errors = e.errors()
        tolerated = [
            err for err in errors
            if err["type"] == "extra_forbidden" and err["loc"] and err["loc"][-1] in ignore
        ]
        if not tolerated or len(tolerated) != len(errors):
            raise ConfigDecodeError(
                f"failed to decode document: {_summary(e)}", field_errors(e)
            ) from e

    for err in tolerated:
        if _drop(data, tuple(err["loc"])):
            logger.warning("Ignoring deprecated field %s", format_loc(err["loc"]))

    try:
        return build(data)
    except ValidationError as e:
        raise ConfigDecodeError(
            f"failed to decode document: {_summary(e)}", field_errors(e)
        ) from e


def _summary(error: ValidationError) -> str:
    return "; ".join(f"{loc}: {msg}" for loc, msg in field_errors(error))
