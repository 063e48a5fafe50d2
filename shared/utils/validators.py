from typing import Any, Optional, Union


def validate_non_empty_string(value):
    return isinstance(value, str) and bool(value.strip())


def parse_number(value: Any) -> Optional[Union[int, float]]:
    """Coerce a JSON or form value to a number, None when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return None
    return None


def validate_price(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0
