"""
Protocols for the objects transformers work with.

Django models and ``django.core.paginator.Page`` are handled directly; these
protocols let other objects take part without inheriting from anything.
"""

from typing import TYPE_CHECKING, Any, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .base import Transformer


@runtime_checkable
class Transformable(Protocol):
    """An object that knows which transformer turns it into a dict."""

    def get_transformer(self) -> "Transformer":
        ...


@runtime_checkable
class Paginated(Protocol):
    """A page of results that exposes the items on the current page."""

    def current_page_items(self) -> Iterable[Any]:
        ...


__all__ = ["Transformable", "Paginated"]
