"""
Read-only registry mapping model types to transformer types.

The registry is built once at startup (see ``apps.py``) from the
``MODEL_TRANSFORMERS["TRANSFORMERS"]`` setting and passed to whatever needs
to resolve transformers. It supports:

- Keys given as classes, dotted paths or Django model labels ("blog.User")
- MRO-aware lookup (a transformer configured for a parent class serves subclasses)
- Cached lookups (no repeated MRO walks)

A missing entry is not an error; ``get()`` returns None and ``has()`` False so
callers can fall back to other resolution paths.
"""

import inspect
import logging
from typing import TYPE_CHECKING, Iterator, Mapping

from .exceptions import InvalidTransformerError, TransformerNotFoundError
from .resolver import Resolver, class_path

if TYPE_CHECKING:
    from .base import Transformer
    from .config import TransformerSettings

logger = logging.getLogger(__name__)

TransformerRef = str | type


def lookup_names(model_type: type) -> Iterator[str]:
    """
    Yield the registry keys a type can be found under, most specific first.

    For each class in the MRO this is its dotted path followed by its Django
    model label when the class is a model.
    """
    for ancestor in inspect.getmro(model_type):
        if ancestor is object:
            continue
        yield class_path(ancestor)
        meta = ancestor.__dict__.get("_meta")
        if meta is not None:
            yield meta.label
            yield meta.label_lower


class TransformerRegistry:
    """
    Mapping from model type name to transformer type name.

    Example:
        registry = TransformerRegistry({User: UserTransformer, "blog.Post": "blog.transformers.PostTransformer"})

        registry.has(User)          # True
        registry.make(post)         # PostTransformer instance
    """

    def __init__(
        self,
        transformers: Mapping[TransformerRef, TransformerRef] | None = None,
        *,
        resolver: Resolver | None = None,
        singletons: bool = False,
    ):
        self.resolver = resolver or Resolver()
        self._entries: dict[str, TransformerRef] = {}
        self._cache: dict[type, TransformerRef | None] = {}

        for model, transformer in (transformers or {}).items():
            key = model if isinstance(model, str) else class_path(model)
            self._entries[key] = transformer
            if singletons:
                self.resolver.singleton(transformer)

        logger.debug(f"Transformer registry built with {len(self._entries)} entries")

    @classmethod
    def from_settings(
        cls,
        transformer_settings: "TransformerSettings | None" = None,
        *,
        resolver: Resolver | None = None,
    ) -> "TransformerRegistry":
        """Build a registry from ``MODEL_TRANSFORMERS`` settings."""
        from .config import get_transformer_settings

        transformer_settings = transformer_settings or get_transformer_settings()
        return cls(
            transformer_settings.transformers,
            resolver=resolver,
            singletons=transformer_settings.singletons,
        )

    def __contains__(self, model) -> bool:
        return self.has(model)

    def __len__(self) -> int:
        return len(self._entries)

    def _model_type(self, model) -> type | str:
        if isinstance(model, (str, type)):
            return model
        return type(model)

    def get(self, model) -> TransformerRef | None:
        """
        Get the transformer reference configured for a model.

        Args:
            model: Model class, model instance, dotted path or model label.

        Returns:
            The configured transformer class or dotted path, or None.
        """
        model_type = self._model_type(model)

        if isinstance(model_type, str):
            return self._entries.get(model_type)

        if model_type in self._cache:
            return self._cache[model_type]

        found = None
        for name in lookup_names(model_type):
            if name in self._entries:
                found = self._entries[name]
                break

        self._cache[model_type] = found
        return found

    def has(self, model) -> bool:
        """Check whether a transformer is configured for a model."""
        return self.get(model) is not None

    def make(self, model) -> "Transformer":
        """
        Resolve the transformer configured for a model.

        Args:
            model: Model class, model instance, dotted path or model label.

        Returns:
            A Transformer bound to this registry.

        Raises:
            TransformerNotFoundError: If nothing is configured for the model.
            ResolutionError: If the transformer cannot be built.
            InvalidTransformerError: If the configured class is not a Transformer.
        """
        reference = self.get(model)
        if reference is None:
            name = model if isinstance(model, str) else self._model_type(model).__name__
            raise TransformerNotFoundError(f"No transformer configured for {name}")

        return self.build(reference)

    def build(self, reference: TransformerRef) -> "Transformer":
        """Resolve a transformer reference and check what comes back."""
        from .base import Transformer

        transformer = self.resolver.resolve(reference)

        if not isinstance(transformer, Transformer):
            raise InvalidTransformerError(
                f"{reference!r} resolved to {type(transformer).__name__}, "
                f"which is not a Transformer"
            )

        if transformer.registry is None:
            transformer.registry = self

        return transformer

    def transformer_names(self) -> list[str]:
        """Return the dotted paths of every configured transformer."""
        return [
            ref if isinstance(ref, str) else class_path(ref)
            for ref in self._entries.values()
        ]


def get_default_registry() -> TransformerRegistry:
    """
    Return the registry built when the app started.

    Falls back to a registry built from settings when the app is not in
    ``INSTALLED_APPS``.
    """
    from django.apps import apps

    global _fallback_registry

    try:
        app_config = apps.get_app_config("model_transformers")
    except LookupError:
        if _fallback_registry is None:
            _fallback_registry = TransformerRegistry.from_settings()
        return _fallback_registry

    if app_config.registry is None:
        app_config.registry = TransformerRegistry.from_settings()
    return app_config.registry


_fallback_registry: TransformerRegistry | None = None
