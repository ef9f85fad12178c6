"""Base class for model transformers.

A transformer turns one model instance into one plain dict. The base class
takes care of everything else:

- Querysets, lists, related managers and pages are transformed item by item
- Relation paths added with ``with_related("posts.tags")`` are expanded
  recursively using the transformer resolved for each related model
- Alternate output shapes are selected with ``set_transformation("admin")``

Example:

    class UserTransformer(Transformer):
        def get_transformation(self, user):
            return {"name": user.name, "email": user.email}

        def admin_transformation(self, user):
            return {**self.get_transformation(user), "isAdmin": user.is_staff}

    UserTransformer().with_related("posts.tags").transform(user)
    UserTransformer().set_transformation("admin").transform(User.objects.all())
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Iterable

from django.core.paginator import Page
from django.db import models

from .config import get_max_depth
from .exceptions import (
    RelationCycleError,
    RelationDepthExceededError,
    TransformerConfigurationError,
    UnknownTransformationError,
)
from .plain import is_collection, to_plain
from .types import Paginated, Transformable

if TYPE_CHECKING:
    from .registry import TransformerRegistry

logger = logging.getLogger(__name__)

TRANSFORMATION_SUFFIXES = ("_transformation", "Transformation")

# Base-class methods whose names happen to end with a transformation suffix
_RESERVED = frozenset(
    {
        "get_transformation",
        "set_transformation",
        "get_alternate_transformation",
        "get_related_transformation",
    }
)


def transformation(name: str) -> Callable:
    """
    Register a method as a named alternate transformation.

    Methods named ``<name>_transformation`` are registered automatically; use
    this decorator when the method name should differ from the public name.

        @transformation("summary")
        def short_form(self, post):
            return {"title": post.title}
    """
    if not name:
        raise TransformerConfigurationError("Transformation name must not be empty")

    def decorator(func: Callable) -> Callable:
        if not callable(func):
            raise TransformerConfigurationError(
                f"Transformation '{name}' must decorate a method, got {type(func).__name__}"
            )
        func._transformation_name = name
        return func

    return decorator


def normalize_transformation_name(name: str) -> str:
    """Strip a trailing ``_transformation``/``Transformation`` suffix."""
    for suffix in TRANSFORMATION_SUFFIXES:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


def object_identity(obj: Any) -> Any:
    """Identity used by the cycle guard; saved models compare by label and pk."""
    if isinstance(obj, models.Model) and obj.pk is not None:
        return (obj._meta.label, obj.pk)
    return id(obj)


class Transformer(ABC):
    """
    Abstract base class for model transformers.

    Subclasses must implement get_transformation(). Configuration set through
    with_related() and set_transformation() stays on the instance until
    reset(), so share an instance between unrelated calls only after resetting
    it. Instances are not safe to configure from several threads at once.
    """

    # name -> method name, built per subclass in __init_subclass__
    _transformations: dict[str, str] = {}

    def __init__(
        self,
        registry: "TransformerRegistry | None" = None,
        max_depth: int | None = None,
    ):
        self.related: list[str] = []
        self.transformation_name: str | None = None
        self.registry = registry
        self.max_depth = max_depth
        self._depth = 0
        self._trail: tuple[str, ...] = ()
        self._ancestry: frozenset = frozenset()
        self._depth_limit: int | None = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        table = dict(cls._transformations)
        declared: dict[str, str] = {}

        for attr, value in cls.__dict__.items():
            if not callable(value):
                continue

            name = getattr(value, "_transformation_name", None)
            if name is None:
                if attr in _RESERVED or attr.startswith("_"):
                    continue
                if not attr.endswith(TRANSFORMATION_SUFFIXES[0]):
                    continue
                name = normalize_transformation_name(attr)

            if name in declared and declared[name] != attr:
                raise TransformerConfigurationError(
                    f"{cls.__name__} declares transformation '{name}' twice "
                    f"({declared[name]} and {attr})"
                )
            declared[name] = attr

        table.update(declared)
        cls._transformations = table

    @classmethod
    def available_transformations(cls) -> list[str]:
        """Return the names accepted by set_transformation()."""
        return sorted(cls._transformations)

    @abstractmethod
    def get_transformation(self, item: Any) -> dict:
        """Return the default flat dict for one item."""
        pass

    def transform(self, obj: Any) -> Any:
        """
        Transform a single object, a collection or a page.

        Args:
            obj: Model instance, queryset, related manager, list/tuple,
                ``Page`` or ``Paginated`` object.

        Returns:
            A dict for a single object, a list of dicts otherwise.
        """
        if self._depth_limit is not None:
            return self._dispatch(obj)

        # Resolve the nesting limit once per top-level call
        self._depth_limit = self.get_max_depth()
        try:
            return self._dispatch(obj)
        finally:
            self._depth_limit = None

    def _dispatch(self, obj: Any) -> Any:
        if isinstance(obj, Page):
            return self.transform_collection(obj.object_list)

        if isinstance(obj, Paginated):
            return self.transform_collection(obj.current_page_items())

        if isinstance(obj, models.Manager):
            obj = obj.all()

        if is_collection(obj):
            return self.transform_collection(obj)

        if self.related:
            return self.transform_with_related(obj)

        if self.transformation_name:
            return self.get_alternate_transformation(obj)

        return self.get_transformation(obj)

    def transform_collection(self, items: Iterable[Any]) -> list:
        return [self.transform(item) for item in items]

    def get_alternate_transformation(self, item: Any) -> dict:
        """Call the transformation selected with set_transformation()."""
        method_name = self._transformations[self.transformation_name]
        return getattr(self, method_name)(item)

    def with_related(self, *relations: str | list[str] | tuple[str, ...]) -> "Transformer":
        """
        Configure the relation paths to include.

        Accepts one or more dot-separated paths, or a list of them. Any
        previously configured relations AND the active alternate
        transformation are discarded first, so the result is always the
        default shape plus the given relations.
        """
        self.reset()

        for relation in relations:
            paths = relation if isinstance(relation, (list, tuple)) else [relation]
            for path in paths:
                if not isinstance(path, str) or not all(path.split(".")):
                    raise ValueError(f"Invalid relation path: {path!r}")
                if path not in self.related:
                    self.related.append(path)

        return self

    def set_transformation(self, name: str) -> "Transformer":
        """
        Select an alternate transformation by name.

        Raises:
            UnknownTransformationError: If the transformer does not define it.
        """
        normalized = normalize_transformation_name(name)

        if normalized not in self._transformations:
            available = ", ".join(self.available_transformations()) or "none"
            raise UnknownTransformationError(
                f"No such transformation as '{normalized}' on {type(self).__name__}. "
                f"Available: {available}"
            )

        self.transformation_name = normalized
        return self

    def reset(self) -> "Transformer":
        """Clear relations and the alternate transformation."""
        self.related = []
        self.transformation_name = None
        return self

    def transform_with_related(self, item: Any) -> dict:
        """Transform an item and add one key per configured relation."""
        data = dict(self.get_transformation(item))

        for relation in self.related:
            head = relation.split(".", 1)[0]
            data[head] = self.get_related_transformation(item, relation)

        return data

    def get_related_transformation(self, item: Any, relation: str) -> Any:
        """
        Transform the data behind one relation path of an item.

        Only the first segment is read here; the rest of the path is handed
        to the transformer of the related model.
        """
        head, _, tail = relation.partition(".")
        self._guard(item, head)

        related = getattr(item, head)
        if isinstance(related, models.Manager):
            related = related.all()
        if isinstance(related, models.QuerySet):
            related = list(related)

        if related is None:
            return None

        representative = related
        if is_collection(related):
            if not related:
                return []
            representative = related[0]

        transformer = self._resolve_related(representative)
        if transformer is None:
            logger.debug(
                f"No transformer for {type(representative).__name__} "
                f"on '{head}', using plain conversion"
            )
            return to_plain(related)

        transformer = self._descend(transformer, item, head)
        if tail:
            transformer.with_related(tail)

        return transformer.transform(related)

    def get_registry(self) -> "TransformerRegistry":
        if self.registry is None:
            from .registry import get_default_registry

            return get_default_registry()
        return self.registry

    def get_max_depth(self) -> int:
        return self.max_depth if self.max_depth is not None else get_max_depth()

    def _resolve_related(self, representative: Any) -> "Transformer | None":
        from .transformable import TransformableMixin

        registry = self.get_registry()

        if registry.has(representative):
            logger.debug(f"Resolving {type(representative).__name__} transformer from registry")
            return registry.make(representative)

        if isinstance(representative, TransformableMixin):
            return representative.get_transformer(registry)

        if isinstance(representative, Transformable):
            return representative.get_transformer()

        return None

    def _guard(self, item: Any, head: str) -> None:
        max_depth = self._depth_limit
        if max_depth is None:
            max_depth = self.get_max_depth()
        if self._depth + 1 > max_depth:
            raise RelationDepthExceededError(".".join(self._trail + (head,)), max_depth)

        if (object_identity(item), head) in self._ancestry:
            raise RelationCycleError(head, item)

    def _descend(self, transformer: "Transformer", item: Any, head: str) -> "Transformer":
        """Return a copy of a nested transformer positioned one level below this one."""
        nested = copy.copy(transformer).reset()
        if self.registry is not None or nested.registry is None:
            nested.registry = self.registry
        if nested.max_depth is None:
            nested.max_depth = self.max_depth
        nested._depth_limit = self._depth_limit
        nested._depth = self._depth + 1
        nested._trail = self._trail + (head,)
        nested._ancestry = self._ancestry | {(object_identity(item), head)}
        return nested


__all__ = [
    "Transformer",
    "transformation",
    "normalize_transformation_name",
]
