from __future__ import annotations

from typing import Iterator

import pytest

from apiresource import CastFailure, Collection, Model
from apiresource.Support import Collection as BaseCollection
from apiresource.Support import collect

from tests.stubs import VisibleStub


@pytest.fixture
def items() -> Collection:
    return Collection.make_of(VisibleStub, [
        {'id': 1, 'type': 'client', 'price': 5},
        {'id': 2, 'type': 'supplier', 'price': 10},
        {'id': 3, 'type': 'client', 'price': 15},
    ])


class TestModelCollection:
    """Test suite for collections of models."""

    def test_items_are_hydrated(self, items: Collection) -> None:
        assert len(items) == 3
        assert all(isinstance(item, VisibleStub) for item in items)
        assert items.model_class is VisibleStub

    def test_default_model_class(self) -> None:
        collection = Collection([{'id': 1}])

        assert type(collection[0]) is Model

    def test_find_by_key(self, items: Collection) -> None:
        assert items.find(2).type == 'supplier'
        assert items.find(99) is None
        assert items.model_keys() == [1, 2, 3]

    def test_filtering_keeps_the_model_class(self, items: Collection) -> None:
        clients = items.where('type', 'client')

        assert isinstance(clients, Collection)
        assert clients.model_class is VisibleStub
        assert clients.model_keys() == [1, 3]
        assert items.where('price', '>', 5).model_keys() == [2, 3]

    def test_pluck_and_sort(self, items: Collection) -> None:
        assert items.pluck('price').all() == [5, 10, 15]
        assert items.pluck('type', 'id') == {1: 'client', 2: 'supplier', 3: 'client'}
        assert items.sort_by('price', reverse=True).model_keys() == [3, 2, 1]

    def test_projections(self, items: Collection) -> None:
        assert items.all_visible()[0] == {'id': 1, 'type': 'client'}
        assert items.to_dict()[0] == {'id': 1, 'type': 'client', 'price': 5}
        assert items.to_raw()[1] == {'id': 2, 'type': 'supplier', 'price': 10}
        assert items.to_json(visible=True).startswith('[{"id":1,"type":"client"}')

    def test_add_returns_the_collection(self) -> None:
        collection = Collection.make_of(VisibleStub)

        assert collection.add({'id': 1}).add(VisibleStub({'id': 2})) is collection
        assert collection.model_keys() == [1, 2]

    def test_scalar_items_are_rejected(self) -> None:
        with pytest.raises(CastFailure):
            Collection.make_of(VisibleStub, [1])


class TestBaseCollection:
    """Test suite for the generic collection."""

    @pytest.fixture
    def numbers_macro(self) -> Iterator[None]:
        BaseCollection.macro('double_all', lambda collection: collection.map(lambda n: n * 2))
        yield
        BaseCollection._macros.pop('double_all', None)

    def test_core_methods(self) -> None:
        numbers = collect([3, 1, 2])

        assert numbers.count() == 3
        assert numbers.first() == 3
        assert numbers.last(lambda n: n < 3) == 2
        assert numbers.filter(lambda n: n > 1).all() == [3, 2]
        assert numbers.reject(lambda n: n > 1).all() == [1]
        assert numbers.sort_by(lambda n: n).all() == [1, 2, 3]
        assert numbers.reduce(lambda carry, n: carry + n, 0) == 6
        assert collect().is_empty()

    def test_each_stops_on_false(self) -> None:
        seen = []
        collect([1, 2, 3]).each(lambda n: seen.append(n) or n < 2)

        assert seen == [1, 2]

    def test_macros(self, numbers_macro: None) -> None:
        assert collect([1, 2]).double_all().all() == [2, 4]

        with pytest.raises(AttributeError):
            collect([1]).missing_macro()
