"""
Validation of raw field values.

Values arrive as the text a user typed (or as plain numbers from a batch
file). The parsers either return a number or raise one of the InputError
kinds below, tagged with the logical field that held the value so the caller
can point the user at it.
"""

import math
from typing import Iterable, Optional, Union

RawValue = Union[str, int, float, None]


class InputError(ValueError):
    """A field value the calculator cannot use."""

    message = "Value is invalid."

    def __init__(self, field: Optional[str] = None, value: RawValue = None, message: Optional[str] = None):
        self.field = field
        self.value = value
        super().__init__(message or self.message)

    @property
    def reason(self) -> str:
        return self.args[0]

    def __str__(self):
        if self.field:
            return f"{self.field}: {self.reason}"
        return self.reason


class EmptyValueError(InputError):
    message = "Value cannot be empty."


class NotANumberError(InputError):
    message = "Value must be a number."


class NegativeValueError(InputError):
    message = "Value cannot be negative."

    def __init__(self, field: Optional[str] = None, value: RawValue = None, allow_zero: bool = True):
        message = self.message if allow_zero else "Value cannot be negative or zero."
        super().__init__(field, value, message)
        self.allow_zero = allow_zero


def parse_positive_number(raw: RawValue, allow_zero: bool = True, field: Optional[str] = None) -> float:
    """
    Parse a non-negative amount.

    Args:
        raw: Text as entered, or a number
        allow_zero: If False, zero is rejected as well as negatives
        field: Logical field reference attached to any error

    Returns:
        The parsed value

    Raises:
        EmptyValueError: blank input
        NotANumberError: text that is not a finite number
        NegativeValueError: negative (or zero when allow_zero is False)
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise EmptyValueError(field, raw)
    if isinstance(raw, bool):
        raise NotANumberError(field, raw)

    if isinstance(raw, str):
        text = raw.strip()
        # float() accepts digit separators, which a form field should not
        if "_" in text:
            raise NotANumberError(field, raw)
        try:
            value = float(text)
        except ValueError:
            raise NotANumberError(field, raw) from None
    else:
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise NotANumberError(field, raw) from None

    if not math.isfinite(value):
        raise NotANumberError(field, raw)
    if value < 0 or (not allow_zero and value == 0):
        raise NegativeValueError(field, raw, allow_zero=allow_zero)
    return value


def parse_positive_integer(raw: RawValue, allow_zero: bool = True, field: Optional[str] = None) -> int:
    """
    Parse a non-negative whole number.

    Validation is the same as parse_positive_number; the value is then
    truncated toward zero, so "2.9" gives 2 rather than an error.
    """
    return int(parse_positive_number(raw, allow_zero=allow_zero, field=field))


def parse_household_size(raw: RawValue, field: str = "household_size") -> int:
    """Parse a household size: a positive integer of at least one."""
    size = parse_positive_integer(raw, allow_zero=False, field=field)
    # "0.5" passes the positive check but truncates to an empty household
    if size < 1:
        raise NegativeValueError(field, raw, allow_zero=False)
    return size


def sum_amounts(
    items: Iterable[RawValue], field: str, allow_zero: bool = True
) -> tuple[float, list[InputError]]:
    """
    Validate and total a list of amounts.

    Every item is checked so the caller sees all bad lines; errors keep item
    order and name the item as ``field[index]``.

    Returns:
        (total of the valid items, errors)
    """
    total = 0.0
    errors = []
    for i, raw in enumerate(items):
        try:
            total += parse_positive_number(raw, allow_zero=allow_zero, field=f"{field}[{i}]")
        except InputError as e:
            errors.append(e)
    return total, errors


def round_currency(value: float) -> int:
    """Round to a whole currency unit, halves rounded up."""
    return int(math.floor(value + 0.5))
