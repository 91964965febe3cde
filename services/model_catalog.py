"""
Model Catalog - Resolves model keys and lists the available models.
"""

from typing import List, Mapping, Optional

from core.config import RelayConfig
from core.constants import UNKNOWN_MODEL_DESCRIPTION
from models.domain import ModelInfo


def resolve_model_name(
    model_key: Optional[str],
    models: Mapping[str, str],
    default_key: str,
) -> str:
    """
    Map a caller-supplied model key to the canonical model identifier.

    Unknown, empty or missing keys resolve to the default key's identifier.
    """
    if model_key and model_key in models:
        return models[model_key]
    return models[default_key]


def describe_model(model_key: str, descriptions: Mapping[str, str]) -> str:
    return descriptions.get(model_key) or UNKNOWN_MODEL_DESCRIPTION


class ModelCatalog:
    """Read-only view over the configured model table."""

    def __init__(self, config: RelayConfig):
        self._config = config

    @property
    def default_model_key(self) -> str:
        return self._config.default_model_key

    def resolve(self, model_key: Optional[str]) -> str:
        return resolve_model_name(
            model_key, self._config.models, self._config.default_model_key
        )

    def list_models(self) -> List[ModelInfo]:
        """Every configured model once, in configuration order."""
        return [
            ModelInfo(
                key=key,
                name=name,
                description=describe_model(key, self._config.descriptions),
            )
            for key, name in self._config.models.items()
        ]
