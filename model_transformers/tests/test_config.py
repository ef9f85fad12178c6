"""Tests for MODEL_TRANSFORMERS settings handling."""

import pytest

from model_transformers import TransformerConfigurationError
from model_transformers.config import (
    DEFAULT_MAX_DEPTH,
    get_max_depth,
    get_transformer_settings,
)


def test_defaults():
    config = get_transformer_settings({})

    assert config.transformers == {}
    assert config.max_depth == DEFAULT_MAX_DEPTH
    assert config.singletons is False


def test_reads_django_settings():
    config = get_transformer_settings()

    assert config.max_depth == 5
    assert config.transformers == {
        "tests.Post": "model_transformers.tests.transformers.PostTransformer"
    }


def test_get_max_depth_follows_settings(settings):
    settings.MODEL_TRANSFORMERS = {"MAX_DEPTH": 3}

    assert get_max_depth() == 3


@pytest.mark.parametrize(
    "raw",
    [
        {"MAX_DEPTH": 0},
        {"MAX_DEPTH": "deep"},
        {"TRANSFORMERS": ["not", "a", "mapping"]},
        {"UNKNOWN": True},
    ],
)
def test_invalid_settings(raw):
    with pytest.raises(TransformerConfigurationError):
        get_transformer_settings(raw)
