"""Typed accessors for untyped JSON documents."""

from typing import Any, Mapping, Optional, Type, TypeVar

T = TypeVar("T")


def read_value(document: Mapping[str, Any], key: str, expected_type: Type[T]) -> T:
    """
    Read a required field and check its type.

    Raises:
        FieldError: If the key is missing or holds a value of another type
    """
    if key not in document:
        raise FieldError(f"required field '{key}' is missing")
    return _check_type(key, document[key], expected_type)


def read_optional_value(document: Mapping[str, Any], key: str, expected_type: Type[T]) -> Optional[T]:
    """
    Read an optional field. Missing keys and null values yield None.

    Raises:
        FieldError: If the key holds a value of another type
    """
    value = document.get(key)
    if value is None:
        return None
    return _check_type(key, value, expected_type)


def _check_type(key: str, value: Any, expected_type: Type[T]) -> T:
    # bool is an int subclass but never a JSON number
    if isinstance(value, bool) and expected_type is not bool:
        matches = False
    else:
        matches = isinstance(value, expected_type)
    if not matches:
        raise FieldError(
            f"field '{key}' has type {type(value).__name__} but expected {expected_type.__name__}"
        )
    return value


class FieldError(Exception):
    """Exception raised when a document field is missing or mistyped."""
    pass
