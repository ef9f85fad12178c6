"""
Model-side access to transformers.

Models opt in by mixing in ``TransformableMixin`` and, optionally, naming
their transformer:

    class User(TransformableMixin, models.Model):
        transformer = "blog.transformers.UserTransformer"

Models without a ``transformer`` attribute fall back to the registry built
from ``MODEL_TRANSFORMERS``.
"""

import logging
from typing import TYPE_CHECKING, Any

from django.core.paginator import Page
from django.db import models

from .base import Transformer
from .exceptions import InvalidTransformerError, TransformerNotFoundError
from .plain import is_collection
from .types import Paginated

if TYPE_CHECKING:
    from .registry import TransformerRegistry

logger = logging.getLogger(__name__)


def get_transformer(obj: Any, registry: "TransformerRegistry | None" = None) -> Transformer:
    """
    Resolve the transformer for an object.

    Resolution order:
    1. The object's own ``transformer`` attribute (class or dotted path)
    2. The registry entry for the object's type

    Args:
        obj: The object to find a transformer for.
        registry: Registry to use. Defaults to the app registry.

    Returns:
        A Transformer instance.

    Raises:
        TransformerNotFoundError: If neither source names a transformer.
        InvalidTransformerError: If the named class is not a Transformer.
        ResolutionError: If the transformer cannot be imported or built.
    """
    if registry is None:
        from .registry import get_default_registry

        registry = get_default_registry()

    declared = getattr(obj, "transformer", None)

    if declared:
        logger.debug(f"Using transformer declared on {type(obj).__name__}: {declared!r}")
        transformer = registry.resolver.resolve(declared)
    elif registry.has(obj):
        transformer = registry.resolver.resolve(registry.get(obj))
    else:
        raise TransformerNotFoundError(
            f"No transformer found for {type(obj).__name__}. Set a 'transformer' "
            f"attribute on the class or add it to MODEL_TRANSFORMERS['TRANSFORMERS']."
        )

    if not isinstance(transformer, Transformer):
        raise InvalidTransformerError(
            f"Transformer for {type(obj).__name__} is {type(transformer).__name__}, "
            f"which is not a Transformer"
        )

    if transformer.registry is None:
        transformer.registry = registry

    return transformer


class TransformableMixin:
    """Gives a model a ``get_transformer()`` method."""

    transformer: str | type | None = None

    def get_transformer(self, registry: "TransformerRegistry | None" = None) -> Transformer:
        return get_transformer(self, registry)


def transform(
    obj: Any,
    *relations: str,
    transformation: str | None = None,
    registry: "TransformerRegistry | None" = None,
) -> Any:
    """
    Transform an object using the transformer resolved for it.

    Collections and pages use the transformer of their first item; an empty
    collection returns an empty list.

    Example:
        data = transform(user, "posts.tags")
        rows = transform(User.objects.all(), transformation="admin")
    """
    items = obj
    if isinstance(items, Page):
        items = items.object_list
    elif isinstance(items, Paginated):
        items = list(items.current_page_items())
    if isinstance(items, models.Manager):
        items = items.all()

    if is_collection(items):
        items = list(items)
        if not items:
            return []
        representative = items[0]
    else:
        representative = items

    transformer = get_transformer(representative, registry)

    if relations:
        transformer.with_related(*relations)
    if transformation:
        transformer.set_transformation(transformation)

    return transformer.transform(items)


__all__ = ["get_transformer", "TransformableMixin", "transform"]
