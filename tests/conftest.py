import pytest

from db import MemoryKeyValueStore
from form import FormController, PlanFilter
from store import RecordStore


@pytest.fixture
def backend():
    return MemoryKeyValueStore()


@pytest.fixture
def store(backend):
    s = RecordStore(backend, key="sub_customers")
    s.load()
    return s


@pytest.fixture
def form(store):
    return FormController(store)


@pytest.fixture
def plan_filter():
    return PlanFilter()
