"""Explicit registration of document kinds for decoding by apiVersion/kind."""
import logging
from typing import Any, Dict, Tuple, Type

from pydantic import BaseModel

from .errors import ConfigDecodeError
from .loader import IGNORED_FIELDS
from .models.cluster import API_VERSION, KIND, LIST_KIND, ClusterConfig, ClusterConfigList
from .utils.strict import unmarshal_strict

logger = logging.getLogger(__name__)

GroupVersionKind = Tuple[str, str]


class Scheme:
    """Maps (apiVersion, kind) pairs to the models that decode them.

    Nothing is registered implicitly; call ``add_to_scheme`` (or ``register``)
    on a scheme assembled at start-up.
    """

    def __init__(self):
        self._types: Dict[GroupVersionKind, Type[BaseModel]] = {}

    def register(self, api_version: str, kind: str, model: Type[BaseModel]) -> None:
        key = (api_version, kind)
        if key in self._types and self._types[key] is not model:
            raise ValueError(f"{api_version}/{kind} is already registered to {self._types[key].__name__}")
        self._types[key] = model
        logger.debug("Registered %s/%s as %s", api_version, kind, model.__name__)

    def recognizes(self, api_version: str, kind: str) -> bool:
        return (api_version, kind) in self._types

    def model_for(self, api_version: str, kind: str) -> Type[BaseModel]:
        try:
            return self._types[(api_version, kind)]
        except KeyError:
            raise ConfigDecodeError(f"no kind {kind!r} is registered for version {api_version!r}") from None

    def decode(self, payload: Dict[str, Any], data_dir: str = "") -> BaseModel:
        """Decode a document mapping into the model registered for its kind."""
        api_version = payload.get("apiVersion") or API_VERSION
        kind = payload.get("kind") or KIND
        model = self.model_for(api_version, kind)
        if hasattr(model, "unmarshal"):
            return unmarshal_strict(payload, lambda p: model.unmarshal(p, data_dir), IGNORED_FIELDS)
        return unmarshal_strict(
            payload, lambda p: model.model_validate(p, by_alias=True, by_name=False), IGNORED_FIELDS)


def add_to_scheme(scheme: Scheme) -> Scheme:
    """Register the ClusterConfig kinds with ``scheme``."""
    scheme.register(API_VERSION, KIND, ClusterConfig)
    scheme.register(API_VERSION, LIST_KIND, ClusterConfigList)
    return scheme
