from __future__ import annotations

import itertools

import pytest

from src.attendly.attendly.store.store import Store


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def store(id_factory):
    return Store(id_factory=id_factory)
