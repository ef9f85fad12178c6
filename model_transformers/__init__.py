"""Model-to-dict transformers for Django.

Turns model instances, querysets and pages into plain dicts and lists for API
responses, with optional nested relations and alternate output shapes.

Public API
----------

    from model_transformers import Transformer, transform

    class PostTransformer(Transformer):
        def get_transformation(self, post):
            return {"title": post.title}

    PostTransformer().with_related("tags").transform(Post.objects.all())

    # Resolve the transformer from the model or MODEL_TRANSFORMERS
    transform(user, "posts.tags")
"""

from .base import Transformer, normalize_transformation_name, transformation
from .exceptions import (
    InvalidTransformerError,
    RelationCycleError,
    RelationCycleOrDepthExceeded,
    RelationDepthExceededError,
    ResolutionError,
    TransformerConfigurationError,
    TransformerError,
    TransformerNotFoundError,
    UnknownTransformationError,
)
from .registry import TransformerRegistry, get_default_registry
from .resolver import Resolver
from .transformable import TransformableMixin, get_transformer, transform
from .types import Paginated, Transformable

__all__ = [
    # Main API
    "Transformer",
    "transformation",
    "normalize_transformation_name",
    "transform",
    "get_transformer",
    "TransformableMixin",
    "Transformable",
    "Paginated",
    # Resolution
    "TransformerRegistry",
    "get_default_registry",
    "Resolver",
    # Errors
    "TransformerError",
    "TransformerNotFoundError",
    "InvalidTransformerError",
    "UnknownTransformationError",
    "ResolutionError",
    "TransformerConfigurationError",
    "RelationCycleOrDepthExceeded",
    "RelationDepthExceededError",
    "RelationCycleError",
]
