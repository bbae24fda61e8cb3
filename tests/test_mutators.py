from __future__ import annotations

from typing import Any, ClassVar, Dict

import pytest

from apiresource import Attribute, Model
from apiresource.Attributes import MutatorResolver
from apiresource.Support import registry

from tests.stubs import Article, GetMutatorsStub, ResourceModelStub


class PrecedenceStub(Model):
    casts: ClassVar[Dict[str, Any]] = {'count': 'int'}

    def get_count_attribute(self, value: Any) -> str:
        return f"raw:{value!r}"


class FullNameStub(Model):
    full_name = Attribute.make(
        get=lambda model, value: f"{model.first_name} {model.last_name}",
        set=lambda value: dict(zip(('first_name', 'last_name'), value.split(' ', 1))),
    )

    shout = Attribute.make(get=lambda value: (value or '').upper())


class SnakeAttributeStub(Model):
    snake_attributes: ClassVar[bool] = True

    fullName = Attribute.make(get=lambda value: 'computed')


class TestMutatorDiscovery:
    """Test suite for accessor and mutator lookup."""

    def test_the_mutator_cache_is_populated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test discovery in declaration order with snake case names."""
        monkeypatch.setattr(ResourceModelStub, 'snake_attributes', True)

        assert ResourceModelStub().get_mutated_attributes() == ['list_items', 'password']

    def test_get_mutated_attributes_follows_the_case_convention(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the case flag only changes the registered name forms."""
        monkeypatch.setattr(GetMutatorsStub, 'snake_attributes', True)
        model = GetMutatorsStub()

        assert model.get_mutated_attributes() == ['first_name', 'middle_name', 'last_name']

        GetMutatorsStub.reset_mutator_cache()
        monkeypatch.setattr(GetMutatorsStub, 'snake_attributes', False)

        assert model.get_mutated_attributes() == [
            'first_name', 'firstName', 'middle_name', 'middleName', 'last_name', 'lastName',
        ]

    def test_discovery_is_stable_across_resets(self) -> None:
        """Test that recomputing the table yields the same names."""
        before = GetMutatorsStub().get_mutated_attributes()
        GetMutatorsStub.reset_mutator_cache()

        assert GetMutatorsStub().get_mutated_attributes() == before

    def test_reset_only_forgets_the_calling_class(self) -> None:
        """Test that the cache reset is scoped to one class."""
        ResourceModelStub().get_mutated_attributes()
        GetMutatorsStub().get_mutated_attributes()

        GetMutatorsStub.reset_mutator_cache()

        assert registry.has(MutatorResolver.BUCKET, ResourceModelStub)
        assert not registry.has(MutatorResolver.BUCKET, GetMutatorsStub)

    def test_table_is_shared_by_instances(self) -> None:
        """Test that the class is scanned once."""
        first = MutatorResolver(ResourceModelStub).table
        ResourceModelStub({'id': 1}).has_get_mutator('password')

        assert MutatorResolver(ResourceModelStub).table is first

    def test_unanchored_names_are_ignored(self) -> None:
        """Test that only get_<name>_attribute methods are accessors."""
        model = GetMutatorsStub()

        assert not model.has_get_mutator('first_invalid')
        assert not model.has_get_mutator('second_invalid')
        assert not model.has_set_mutator('first_name')

    def test_camel_case_names_reach_snake_mutators(self) -> None:
        """Test that both name forms are registered by default."""
        model = ResourceModelStub()
        model.listItems = [1, 2]

        assert model.list_items == [1, 2]
        assert 'listItems' not in model


class TestMutatorPrecedence:
    """Test suite for mutators against casts."""

    def test_get_mutator_wins_over_cast(self) -> None:
        """Test that the accessor receives the stored (already cast) raw value."""
        model = PrecedenceStub()
        model.count = '5'

        assert model.get_raw_attributes() == {'count': 5}
        assert model.count == 'raw:5'
        assert model.to_dict() == {'count': 'raw:5'}

    def test_accessor_receives_none_for_missing_attribute(self) -> None:
        assert PrecedenceStub().count == 'raw:None'

    def test_to_dict_uses_mutators(self) -> None:
        model = ResourceModelStub()
        model.list_items = [1, 2, 3]

        assert model.to_dict()['list_items'] == [1, 2, 3]


class TestAttributeObjects:
    """Test suite for declarative Attribute accessors."""

    def test_setter_returning_pairs(self) -> None:
        """Test a setter spreading one value over several attributes."""
        model = FullNameStub()
        model.full_name = 'Taylor Otwell'

        assert model.get_attributes() == {'first_name': 'Taylor', 'last_name': 'Otwell'}
        assert model.full_name == 'Taylor Otwell'
        assert model['fullName'] == 'Taylor Otwell'

    def test_single_argument_getter(self) -> None:
        model = FullNameStub({'shout': 'hey'})

        assert model.shout == 'HEY'
        assert model.get_raw_attributes() == {'shout': 'hey'}

    def test_getter_reads_other_attributes(self) -> None:
        """Test a computed attribute built from another accessor."""
        model = Article({'title': '  Casting  '})

        assert model.title == 'Casting'
        assert model.headline == 'CASTING'
        assert 'headline' not in model

    def test_descriptor_on_class_is_the_attribute(self) -> None:
        assert isinstance(FullNameStub.full_name, Attribute)
        assert 'full_name' in FullNameStub().get_mutated_attributes()

    def test_camel_declared_attribute_with_snake_names(self) -> None:
        """Test an attribute declared in camel case on a snake cased model."""
        model = SnakeAttributeStub()

        assert model.fullName == 'computed'
        assert model['full_name'] == 'computed'
        assert model.get_mutated_attributes() == ['full_name']
