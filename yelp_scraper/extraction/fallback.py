"""
Fallback chains - pick the first usable value from an ordered list of heuristics
"""

from typing import Any, Callable, Iterable, Optional, Sequence


def is_present(value: Any) -> bool:
    """A value counts as present if it is not None and not a blank string"""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def first_present(values: Iterable[Any]) -> Optional[Any]:
    """Return the first present value (strings trimmed), or None"""
    for value in values:
        if is_present(value):
            return value.strip() if isinstance(value, str) else value
    return None


def first_result(extractors: Sequence[Callable[..., Any]], *args, **kwargs) -> Optional[Any]:
    """
    Run extractors in order and return the first present result

    Later extractors are not called once one succeeds.
    """
    return first_present(extractor(*args, **kwargs) for extractor in extractors)
