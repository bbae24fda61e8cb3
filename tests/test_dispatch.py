from __future__ import annotations

from typing import Iterator, List

import pytest

from apiresource import Model, UnknownOperation

from tests.stubs import ResourceModelStub


class Invoice(Model):
    pass


@pytest.fixture
def invoice_macros() -> Iterator[None]:
    """Forget macros registered on Invoice after the test."""
    yield
    Invoice.flush_macros()


class TestSetterCalls:
    """Test suite for setter-style dynamic calls."""

    def test_snake_setter(self) -> None:
        model = Model()

        assert model.call('set_name', 'foo') is model
        assert model.name == 'foo'

    def test_camel_setter_defaults_to_true(self) -> None:
        model = Model()
        model.call('setActive')

        assert model.active is True

    def test_setter_uses_set_mutator(self) -> None:
        model = ResourceModelStub()
        model.call('set_password', 'secret')

        assert model.get_attributes() == {'password_hash': 'e5e9fa1ba31ecd1ae84f75caaa474f3a663f05f4'}

    def test_camel_setter_reaches_snake_mutator(self) -> None:
        model = ResourceModelStub()
        model.call('setListItems', [1, 2])

        assert model.list_items == [1, 2]

    def test_declared_methods_are_called(self) -> None:
        model = Model({'id': 4})

        assert model.call('get_key') == 4
        assert model.call('set_key', 5).get_key() == 5


class TestMacros:
    """Test suite for registered extension handlers."""

    def test_instance_macro(self, invoice_macros: None) -> None:
        Invoice.macro('summary', lambda model, prefix='#': f"{prefix}{model.get_key()}")
        invoice = Invoice({'id': 7})

        assert invoice.call('summary') == '#7'
        assert invoice.call('summary', 'No. ') == 'No. 7'
        assert invoice.summary() == '#7'
        assert Invoice.has_macro('summary')

    def test_macros_are_inherited_not_shared_upwards(self, invoice_macros: None) -> None:
        Invoice.macro('total', lambda model: 0)

        with pytest.raises(UnknownOperation):
            Model().call('total')

    def test_base_class_macros_reach_subclasses(self) -> None:
        Model.macro('describe', lambda model: type(model).__name__)

        assert Invoice().call('describe') == 'Invoice'

    def test_static_macro_receives_the_class(self) -> None:
        Model.macro('make_many', lambda cls, count: [cls() for _ in range(count)])

        made: List[Model] = Invoice.call_static('make_many', 2)
        assert len(made) == 2
        assert all(isinstance(item, Invoice) for item in made)

    def test_unknown_operation(self) -> None:
        with pytest.raises(UnknownOperation) as exc_info:
            Invoice().call('frobnicate')

        assert exc_info.value.method == 'frobnicate'
        assert isinstance(exc_info.value, AttributeError)
        assert 'Invoice::frobnicate' in str(exc_info.value)

    def test_unknown_static_operation(self) -> None:
        with pytest.raises(UnknownOperation):
            Invoice.call_static('frobnicate')

    def test_private_names_are_not_dispatched(self) -> None:
        with pytest.raises(UnknownOperation):
            Model().call('_assign', 'x', 1)
