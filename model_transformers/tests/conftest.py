"""Shared fixtures for model_transformers tests."""

import pytest

from model_transformers.tests.models import Category, Post, Tag, User


@pytest.fixture
def user(db):
    """Create a single user without posts."""
    return User.objects.create(name="Ada Lovelace", email="ada@example.com")


@pytest.fixture
def user_with_posts(db):
    """Create a user with 3 posts, each tagged with 4 tags."""
    user = User.objects.create(name="Grace Hopper", email="grace@example.com")

    for i in range(3):
        post = Post.objects.create(title=f"Post {i}", body=f"Body {i}", author=user)
        tags = [Tag.objects.create(name=f"tag-{i}-{j}") for j in range(4)]
        post.tags.add(*tags)

    return user


@pytest.fixture
def categorized_post(db, user):
    """Create a post that belongs to a category."""
    category = Category.objects.create(title="News", description="Daily news")
    return Post.objects.create(title="Hello", body="World", author=user, category=category)
