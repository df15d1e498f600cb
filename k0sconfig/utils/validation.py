"""Pure predicate helpers used by the ``validate_spec`` methods."""
import ipaddress
import re
from typing import Optional

from ..errors import ConfigValidationError, ReleaseNameError

# Same pattern Helm uses for release names
RELEASE_NAME_MAX_LEN = 53
RELEASE_NAME_PATTERN = r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$"
_RELEASE_NAME = re.compile(RELEASE_NAME_PATTERN)

DNS1123_SUBDOMAIN_MAX_LEN = 253
_DNS1123_SUBDOMAIN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$")

# Docker reference grammar for tags
_IMAGE_TAG = re.compile(r"^[\w][\w.-]{0,127}$")
_IMAGE_DIGEST = re.compile(r"^[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9a-fA-F]{32,}$")


def validate_release_name(name: str, field: str = "name") -> Optional[ConfigValidationError]:
    """Check ``name`` against the Helm release-name rules."""
    if not name:
        return ConfigValidationError("no name provided", field)
    if len(name) > RELEASE_NAME_MAX_LEN or not _RELEASE_NAME.match(name):
        return ReleaseNameError(
            f"invalid release name {name!r}, must match regex {RELEASE_NAME_PATTERN} "
            f"and the length must not be longer than {RELEASE_NAME_MAX_LEN}",
            field,
        )
    return None


def is_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def is_dns1123_subdomain(value: str) -> bool:
    return len(value) <= DNS1123_SUBDOMAIN_MAX_LEN and bool(_DNS1123_SUBDOMAIN.match(value))


def is_valid_port(port: int) -> bool:
    return 0 < port < 65536


def is_image_version(value: str) -> bool:
    """Accept an image tag, a digest, or ``tag@digest``."""
    if _IMAGE_DIGEST.match(value):
        return True
    tag, _, digest = value.partition("@")
    if digest:
        return (not tag or bool(_IMAGE_TAG.match(tag))) and bool(_IMAGE_DIGEST.match(digest))
    return bool(_IMAGE_TAG.match(value))
