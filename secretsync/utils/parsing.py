"""String parsing helpers for annotation values."""

_TRUE_VALUES = {"1", "t", "true"}
_FALSE_VALUES = {"0", "f", "false"}


def string_to_bool(value: str) -> bool:
    """Parse a boolean annotation value (case-insensitive).

    Raises:
        ValueError: If value is not one of 1, t, true, 0, f, false
    """
    normalized = value.lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")
