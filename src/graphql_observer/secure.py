"""
Secure Values
=============

Wrapper marking a bound variable as sensitive.
"""

from dataclasses import dataclass
from typing import Any, Callable

ELISION_MASK = "****"

DEFAULT_ELISION_KEEP_CHAR_COUNT = 4


@dataclass(frozen=True)
class SecureValue:
    """
    A sensitive variable value.

    ``str()`` returns the raw value; telemetry must go through
    :meth:`get_elided_value` when elision is enabled.
    """

    value: Any

    def __str__(self) -> str:
        return "null" if self.value is None else str(self.value)

    def __repr__(self) -> str:
        return f"SecureValue({self.get_elided_value(0)!r})"

    def get_elided_value(self, keep_char_count: int) -> str:
        """
        Return the value with everything after the first ``keep_char_count``
        characters replaced by a fixed mask.

        The mask length does not depend on the original length.
        """
        raw = str(self)
        keep = max(0, min(keep_char_count, len(raw)))
        return raw[:keep] + ELISION_MASK


ElisionPolicy = Callable[[SecureValue], int]


def fixed_elision(keep_char_count: int) -> ElisionPolicy:
    """Build a policy that keeps the same number of characters for every value."""
    return lambda secure_value: keep_char_count
