"""Shared fixtures."""

from datetime import datetime

import pytest

from newsagg.config import FeedConfig, SyncSettings
from newsagg.errors import StorageError
from newsagg.models import Language
from tests.helpers import NOW, InMemoryArticleStore


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def store() -> InMemoryArticleStore:
    return InMemoryArticleStore()


@pytest.fixture
def settings() -> SyncSettings:
    return SyncSettings(fetch_timeout=2.0, run_timeout=10.0)


@pytest.fixture
def english_feed() -> FeedConfig:
    return FeedConfig(name="Example News", url="https://feeds.example.com/world.xml", language=Language.EN)


@pytest.fixture
def arabic_feed() -> FeedConfig:
    return FeedConfig(name="Example Arabic", url="https://feeds.example.com/ar.xml", language=Language.AR)


@pytest.fixture
def broken_store() -> InMemoryArticleStore:
    failing = InMemoryArticleStore()
    failing.fail_with = StorageError("connection lost")
    return failing
