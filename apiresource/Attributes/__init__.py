"""
Attribute storage and override layer of resource models.

Classes:
- AttributeStore: Raw attribute bag owned by each model instance
- Attribute: Declarative accessor/mutator pair bound to a class attribute
- MutatorResolver: Per-class lookup of get_*_attribute / set_*_attribute methods
- FillableGuard: Mass assignment policy

Examples:
    class User(Model):
        full_name = Attribute.make(
            get=lambda model, value: f"{model.first_name} {model.last_name}",
        )

        def set_email_attribute(self, value):
            self.store_raw('email', value.lower())
"""

from .AttributeStore import AttributeStore
from .AccessorMutator import Attribute, MutatorResolver, MutatorTable
from .FillableGuard import FillableGuard

__all__ = [
    'AttributeStore',
    'Attribute',
    'MutatorResolver',
    'MutatorTable',
    'FillableGuard',
]
