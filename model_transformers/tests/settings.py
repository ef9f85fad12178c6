"""
Test settings for model_transformers.

Uses SQLite in-memory database for fast testing.
"""

SECRET_KEY = "model-transformers-tests"

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "model_transformers",
    "model_transformers.tests",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
        "TEST": {
            "NAME": ":memory:",
        },
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True

MODEL_TRANSFORMERS = {
    "TRANSFORMERS": {
        "tests.Post": "model_transformers.tests.transformers.PostTransformer",
    },
    "MAX_DEPTH": 5,
}
