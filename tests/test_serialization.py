from __future__ import annotations

import json
from datetime import datetime
from typing import Any, ClassVar, Dict, List

from apiresource import Model
from apiresource.Resource import Serializer

from tests.stubs import ResourceModelStub, TransformStub, VisibleStub


class WildcardStub(Model):
    visible: ClassVar[List[str]] = ['*']
    casts: ClassVar[Dict[str, Any]] = {'seen_at': 'datetime'}


class TestVisibility:
    """Test suite for visible-only projections."""

    def test_visible_set_always_includes_the_key(self) -> None:
        model = VisibleStub({'id': 1, 'name': 'Test', 'type': 'client'})

        assert model.to_visible_dict() == {'id': 1, 'type': 'client'}

    def test_default_visible_set_is_the_key_only(self) -> None:
        assert Model({'id': 1, 'name': 'Test'}).to_visible_dict() == {'id': 1}

    def test_renamed_key_is_visible(self) -> None:
        model = VisibleStub({'uuid': 'abc', 'id': 1, 'type': 'x'}).set_key_name('uuid', 'string')

        assert model.to_visible_dict() == {'uuid': 'abc', 'type': 'x'}

    def test_wildcard_exposes_everything(self) -> None:
        model = WildcardStub({'id': 1, 'seen_at': '2015-04-17 22:59:01', 'name': 'x'})

        assert model.to_visible_dict() == model.to_dict()

    def test_visible_attributes_are_raw(self) -> None:
        model = VisibleStub({'id': 1, 'type': 'x', 'name': 'y'})

        assert Serializer(model).visible_attributes() == {'id': 1, 'type': 'x'}


class TestSerialization:
    """Test suite for full projections and JSON text."""

    def test_to_dict_formats_dates(self) -> None:
        model = WildcardStub({'seen_at': datetime(2015, 4, 17, 22, 59, 1)})

        assert model.to_dict() == {'seen_at': '2015-04-17 22:59:01'}

    def test_to_dict_recurses_into_plain_structures(self) -> None:
        model = Model({'history': [{'contact': VisibleStub({'id': 2, 'name': 'x'})}]})

        assert model.to_dict() == {'history': [{'contact': {'id': 2}}]}

    def test_to_json_is_compact(self) -> None:
        model = VisibleStub({'id': 1, 'type': 'a', 'name': 'x'})

        assert model.to_json() == '{"id":1,"type":"a","name":"x"}'
        assert model.to_json(visible=True) == '{"id":1,"type":"a"}'

    def test_to_json_accepts_dumps_options(self) -> None:
        text = Model({'b': 1, 'a': 2}).to_json(sort_keys=True)

        assert text == '{"a":2,"b":1}'

    def test_stored_attributes_only(self) -> None:
        """Test that calculated attributes do not appear unless stored."""
        model = ResourceModelStub()
        model.password = 'secret'

        data = model.to_dict()
        assert 'password' not in data
        assert set(data) == {'password_hash'}

    def test_nested_graph(self) -> None:
        model = TransformStub({
            'id': 10,
            'contact': {'id': 1, 'name': 'Test', 'type': 'client'},
            'items': [{'id': 1, 'price': 5}],
        })

        assert json.loads(model.to_json()) == {
            'id': 10,
            'contact': {'id': 1, 'type': 'client'},
            'items': [{'id': 1}],
        }
        assert json.loads(model.to_json(visible=True)) == {'id': 10}
