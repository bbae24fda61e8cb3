from __future__ import annotations

from typing import Any, Optional


class ResourceException(Exception):
    """Base exception for API resource models"""
    pass


class GuardRejection(ResourceException):
    """Exception raised when a non-fillable attribute is mass assigned"""

    def __init__(self, attribute: str, model: Optional[str] = None) -> None:
        self.attribute = attribute
        self.model = model

        target = f" on [{model}]" if model else ""
        super().__init__(
            f"Add [{attribute}] to the fillable property to allow mass assignment{target}."
        )


class UnknownOperation(ResourceException, AttributeError):
    """Exception raised when a dynamic call matches no setter or macro"""

    def __init__(self, method: str, owner: Optional[str] = None) -> None:
        self.method = method
        self.owner = owner

        target = f"{owner}::" if owner else ""
        super().__init__(f"Method {target}{method} does not exist.")


class CastFailure(ResourceException, ValueError):
    """Exception raised when a value cannot be converted by its cast rule"""

    def __init__(self, attribute: Optional[str], value: Any, rule: Optional[str] = None) -> None:
        self.attribute = attribute
        self.value = value
        self.rule = rule

        rule_str = f" as `{rule}`" if rule else ""
        name_str = f" for attribute `{attribute}`" if attribute else ""
        super().__init__(f"Unable to cast {value!r}{rule_str}{name_str}.")


class MissingValue(ResourceException, KeyError):
    """Exception raised when a required path parameter is not supplied"""

    def __init__(self, parameter: str, template: Optional[str] = None) -> None:
        self.parameter = parameter
        self.template = template

        template_str = f" in path `{template}`" if template else ""
        super().__init__(f"Missing required parameter `{parameter}`{template_str}.")

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidCast(ResourceException):
    """Exception raised when a declared cast rule is not recognized"""

    def __init__(self, attribute: str, rule: Any) -> None:
        self.attribute = attribute
        self.rule = rule

        super().__init__(f"Call to undefined cast [{rule!r}] on attribute `{attribute}`.")
