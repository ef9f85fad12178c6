"""Fallback conversion of related values that have no transformer."""

import dataclasses
from collections.abc import Mapping
from typing import Any

from django.db import models
from django.forms.models import model_to_dict


def is_collection(value: Any) -> bool:
    """True for the batch types a transformer maps over."""
    return isinstance(value, (list, tuple, models.QuerySet))


def to_plain(value: Any) -> Any:
    """
    Convert a value to plain dicts and lists.

    Models go through ``model_to_dict``, objects with a ``to_dict()`` method
    use it, dataclasses use ``asdict``. Collections and related managers are
    converted item by item. Anything else is returned unchanged.
    """
    if isinstance(value, models.Manager):
        value = value.all()

    if is_collection(value):
        return [to_plain(item) for item in value]

    if isinstance(value, models.Model):
        return model_to_dict(value)

    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)

    if isinstance(value, Mapping):
        return dict(value)

    return value
