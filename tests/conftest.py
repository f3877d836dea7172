import pytest

from collectionkit.collection.models import ListCollection
from collectionkit.collection.selection import SelectionMode, SelectionState
from collectionkit.collection.store import CollectionStore


PEOPLE = [
    {"id": "a", "name": "Alice", "age": 30, "active": True, "joined": "2021-03-01"},
    {"id": "b", "name": "bob", "age": 25, "active": False, "joined": "2019-07-15"},
    {"id": "c", "name": "Carol", "age": None, "active": True, "joined": "not a date"},
    {"id": "d", "name": "dave", "age": 41, "active": False, "joined": "2020-01-09T12:00:00Z"},
    {"id": "e", "name": "Eve", "age": 35, "active": True, "joined": None},
]


@pytest.fixture
def people():
    return [dict(p) for p in PEOPLE]


def make_collection(keys, texts=None):
    """Collection of plain string records keyed by themselves."""
    texts = texts or {}
    return ListCollection.from_records(
        list(keys),
        key_extractor=lambda k: k,
        text_value_extractor=lambda k: texts.get(k, k),
    )


@pytest.fixture
def letters():
    return make_collection(["a", "b", "c", "d", "e", "f"])


@pytest.fixture
def make_store():
    """Factory for a store loaded with string keys."""
    def _make(keys=("a", "b", "c", "d", "e"), mode=SelectionMode.MULTIPLE, **state):
        store = CollectionStore(SelectionState(selection_mode=mode, **state))
        store.set_items(list(keys), key_extractor=lambda k: k, text_value_extractor=lambda k: k)
        return store
    return _make


@pytest.fixture
def collection_of():
    return make_collection
