"""
Django app configuration for model_transformers.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class ModelTransformersConfig(AppConfig):
    """Configuration for the model_transformers app."""

    name = "model_transformers"
    verbose_name = "Model Transformers"

    registry = None

    def ready(self):
        """
        Build the transformer registry.

        Runs once when Django starts. The registry is read-only afterwards;
        code that needs a different mapping should build its own
        TransformerRegistry and pass it in.
        """
        from .registry import TransformerRegistry

        self.registry = TransformerRegistry.from_settings()
        logger.debug(
            f"Registered transformers: {', '.join(self.registry.transformer_names()) or 'none'}"
        )
