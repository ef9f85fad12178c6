"""
Resolution service that turns class references into instances.

Targets can be classes, dotted import paths, or names bound to a factory.
Bound factories enable dependency injection:

    resolver = Resolver()
    resolver.bind("blog.transformers.UserTransformer", lambda: UserTransformer(clock=clock))
    transformer = resolver.resolve("blog.transformers.UserTransformer")
"""

import logging
from typing import Any, Callable

from django.utils.module_loading import import_string

from .exceptions import ResolutionError

logger = logging.getLogger(__name__)

Factory = Callable[[], Any]


def class_path(cls: type) -> str:
    """Return the dotted import path of a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


class Resolver:
    """
    Builds instances for class references.

    Unbound targets produce a fresh instance on every call. Names registered
    with ``singleton()`` produce the same instance until ``forget()`` is called.
    """

    def __init__(self):
        self._factories: dict[str, Factory] = {}
        self._singletons: set[str] = set()
        self._instances: dict[str, Any] = {}

    @staticmethod
    def _key(target: str | type) -> str:
        return target if isinstance(target, str) else class_path(target)

    def bind(self, target: str | type, factory: Factory) -> None:
        """
        Bind a factory for a target.

        Args:
            target: Class or dotted path the factory stands for.
            factory: Zero-argument callable returning the instance.
        """
        if not callable(factory):
            raise TypeError(f"Factory must be callable, got {type(factory)}")
        key = self._key(target)
        self._factories[key] = factory
        self._instances.pop(key, None)
        logger.debug(f"Bound factory for {key}")

    def singleton(self, target: str | type, factory: Factory | None = None) -> None:
        """Mark a target as shared, optionally binding its factory at the same time."""
        key = self._key(target)
        if factory is not None:
            self.bind(key, factory)
        self._singletons.add(key)

    def is_bound(self, target: str | type) -> bool:
        return self._key(target) in self._factories

    def forget(self, target: str | type) -> None:
        """Drop any cached singleton instance for a target."""
        self._instances.pop(self._key(target), None)

    def resolve(self, target: str | type) -> Any:
        """
        Resolve a target to an instance.

        Args:
            target: Class, dotted path, or bound name.

        Returns:
            The instance produced by the bound factory or the class constructor.

        Raises:
            ResolutionError: If the path cannot be imported or construction fails.
        """
        key = self._key(target)

        if key in self._instances:
            return self._instances[key]

        factory = self._factories.get(key)
        if factory is None:
            factory = target if isinstance(target, type) else self._import(key)

        try:
            instance = factory()
        except Exception as e:
            raise ResolutionError(
                f"Could not instantiate '{key}': {e}", target=key, original_error=e
            ) from e

        if key in self._singletons:
            self._instances[key] = instance

        return instance

    @staticmethod
    def _import(path: str) -> Callable[[], Any]:
        try:
            imported = import_string(path)
        except ImportError as e:
            raise ResolutionError(
                f"Could not import '{path}': {e}", target=path, original_error=e
            ) from e

        if not callable(imported):
            raise ResolutionError(f"'{path}' is not callable", target=path)

        return imported
