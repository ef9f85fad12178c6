"""
Settings for model transformers.

All configuration lives in a single ``MODEL_TRANSFORMERS`` dict in Django
settings:

    MODEL_TRANSFORMERS = {
        "TRANSFORMERS": {
            "blog.User": "blog.transformers.UserTransformer",
        },
        "MAX_DEPTH": 8,
        "SINGLETONS": False,
    }

A project without the setting gets an empty registry, so only transformers
declared directly on models (or instantiated by hand) are available.
"""

import logging
from typing import Any

from django.conf import settings
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import TransformerConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_NAME = "MODEL_TRANSFORMERS"

DEFAULT_MAX_DEPTH = 8


class TransformerSettings(BaseModel):
    """Validated ``MODEL_TRANSFORMERS`` settings."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    transformers: dict[str, str] = Field(
        default_factory=dict,
        alias="TRANSFORMERS",
        description="Model dotted path or app label -> transformer dotted path",
    )
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        alias="MAX_DEPTH",
        description="Maximum nesting of relation paths",
    )
    singletons: bool = Field(
        default=False,
        alias="SINGLETONS",
        description="Share one instance per configured transformer",
    )


def get_transformer_settings(raw: dict[str, Any] | None = None) -> TransformerSettings:
    """
    Load and validate transformer settings.

    Args:
        raw: Optional settings dict. Defaults to ``settings.MODEL_TRANSFORMERS``.

    Returns:
        TransformerSettings instance.

    Raises:
        TransformerConfigurationError: If the settings are malformed.
    """
    if raw is None:
        raw = getattr(settings, SETTINGS_NAME, None) or {}

    try:
        return TransformerSettings.model_validate(raw)
    except ValidationError as e:
        raise TransformerConfigurationError(f"Invalid {SETTINGS_NAME} setting: {e}") from e


def get_max_depth() -> int:
    """Return the configured maximum relation nesting depth."""
    return get_transformer_settings().max_depth
