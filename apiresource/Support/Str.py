from __future__ import annotations

import re
from typing import Dict, Tuple


class Str:
    """Laravel-style string helper class."""

    # Cache for converted values, keyed by (method, value, delimiter)
    _cache: Dict[Tuple[str, str, str], str] = {}

    @staticmethod
    def snake(value: str, delimiter: str = '_') -> str:
        """Convert a string to snake case."""
        key = ('snake', value, delimiter)
        if key in Str._cache:
            return Str._cache[key]

        result = re.sub(r'([a-z0-9])([A-Z])', rf'\1{delimiter}\2', value)
        result = re.sub(r'([A-Z]+)([A-Z][a-z])', rf'\1{delimiter}\2', result)
        # Replace non-alphanumeric with delimiter
        result = re.sub(r'[^a-zA-Z0-9]', delimiter, result).lower()
        # Replace multiple delimiters with single delimiter
        result = re.sub(f'{re.escape(delimiter)}+', delimiter, result).strip(delimiter)

        Str._cache[key] = result
        return result

    @staticmethod
    def kebab(value: str) -> str:
        """Convert a string to kebab case."""
        return Str.snake(value, '-')

    @staticmethod
    def studly(value: str) -> str:
        """Convert a value to studly caps case."""
        key = ('studly', value, '')
        if key in Str._cache:
            return Str._cache[key]

        words = re.sub(r'[^a-zA-Z0-9]', ' ', value).split()
        result = ''.join(Str.ucfirst(word) for word in words)

        Str._cache[key] = result
        return result

    @staticmethod
    def camel(value: str) -> str:
        """Convert a value to camel case."""
        return Str.lcfirst(Str.studly(value))

    @staticmethod
    def ucfirst(string: str) -> str:
        """Make a string's first character uppercase."""
        if not string:
            return string
        return string[0].upper() + string[1:]

    @staticmethod
    def lcfirst(string: str) -> str:
        """Make a string's first character lowercase."""
        if not string:
            return string
        return string[0].lower() + string[1:]

    @staticmethod
    def plural(value: str, count: int = 2) -> str:
        """Get the plural form of an English word."""
        if count == 1 or not value:
            return value

        # Simple pluralization rules
        if value.endswith(('s', 'sh', 'ch', 'x', 'z')):
            return value + 'es'
        elif value.endswith('y') and len(value) > 1 and value[-2] not in 'aeiou':
            return value[:-1] + 'ies'
        elif value.endswith('fe'):
            return value[:-2] + 'ves'
        elif value.endswith('f'):
            return value[:-1] + 'ves'
        else:
            return value + 's'

    @staticmethod
    def flush_cache() -> None:
        """Forget every cached conversion."""
        Str._cache.clear()
