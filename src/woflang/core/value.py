"""Tagged value model for the Woflang stack.

A ``Value`` is a closed four-variant union (Integer, Float, String,
Symbol) represented by a frozen dataclass holding a ``ValueType`` tag
and exactly one payload of the matching Python type.  An optional
``Unit`` rides along for display and equality only; it never takes
part in arithmetic.

Example
-------
::

    from woflang.core.value import Unit, Value

    v = Value.from_float(9.81).with_unit(Unit("m/s^2"))
    v.to_text()        # '9.81 m/s^2'
    v.as_numeric()     # 9.81

    Value.from_integer(2) == Value.from_float(2.0)   # False
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Final, Union

from woflang.core.errors import IntegerOverflowError, TypeMismatchError

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

Payload = Union[int, float, str]


class ValueType(Enum):
    """The four value tags."""

    INTEGER = auto()
    FLOAT = auto()
    STRING = auto()
    SYMBOL = auto()


_PAYLOAD_TYPES: Final[dict[ValueType, type]] = {
    ValueType.INTEGER: int,
    ValueType.FLOAT: float,
    ValueType.STRING: str,
    ValueType.SYMBOL: str,
}


@dataclass(frozen=True, slots=True)
class Unit:
    """Unit annotation attached to a value.

    Parameters
    ----------
    name:
        Display name, appended to the rendered value.
    scale:
        Scale factor relative to the unit's base.  Compared for equality
        but never applied automatically.
    """

    name: str
    scale: float = 1.0


@dataclass(frozen=True, slots=True)
class Value:
    """One immutable stack cell.

    Construct values through the ``from_*`` class methods rather than
    the dataclass constructor; they enforce the payload invariants.

    Parameters
    ----------
    type:
        The active variant.
    payload:
        ``int`` for INTEGER, ``float`` for FLOAT, ``str`` for STRING and
        SYMBOL.
    unit:
        Optional unit metadata.
    """

    type: ValueType
    payload: Payload
    unit: Unit | None = None

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES[self.type]
        # bool is an int subclass; it is not a valid integer payload.
        if type(self.payload) is not expected:
            raise TypeMismatchError(expected.__name__, self.payload, self.type.name)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_integer(cls, value: int) -> "Value":
        """Build an INTEGER value.

        Raises
        ------
        IntegerOverflowError
            If ``value`` does not fit in a signed 64-bit integer.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeMismatchError("int", value, "from_integer")
        if not INT64_MIN <= value <= INT64_MAX:
            raise IntegerOverflowError(value)
        return cls(ValueType.INTEGER, value)

    @classmethod
    def from_float(cls, value: float) -> "Value":
        """Build a FLOAT value.  ``int`` arguments are widened."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatchError("float", value, "from_float")
        return cls(ValueType.FLOAT, float(value))

    @classmethod
    def from_string(cls, text: str) -> "Value":
        """Build a STRING value."""
        if not isinstance(text, str):
            raise TypeMismatchError("str", text, "from_string")
        return cls(ValueType.STRING, text)

    @classmethod
    def from_symbol(cls, name: str) -> "Value":
        """Build a SYMBOL value holding an unresolved identifier."""
        if not isinstance(name, str):
            raise TypeMismatchError("str", name, "from_symbol")
        return cls(ValueType.SYMBOL, name)

    def with_unit(self, unit: Unit | None) -> "Value":
        """Return a copy of this value carrying ``unit``."""
        return replace(self, unit=unit)

    # ------------------------------------------------------------------
    # Queries and conversions
    # ------------------------------------------------------------------

    @property
    def is_numeric(self) -> bool:
        """True for INTEGER and FLOAT values."""
        return self.type in (ValueType.INTEGER, ValueType.FLOAT)

    def as_numeric(self) -> float:
        """Return the payload as a float.

        Raises
        ------
        TypeMismatchError
            For STRING and SYMBOL values.
        """
        if not self.is_numeric:
            raise TypeMismatchError("a numeric value", self.to_text(), "as_numeric")
        return float(self.payload)

    def to_text(self) -> str:
        """Render the value for display.

        Integers print without a decimal point, floats use the ``%g``
        default formatting (``8.0`` renders as ``8``), strings and symbols
        print verbatim.  A unit name is appended after a space.
        """
        if self.type is ValueType.INTEGER:
            text = str(self.payload)
        elif self.type is ValueType.FLOAT:
            text = format(self.payload, "g")
        else:
            text = str(self.payload)
        if self.unit is not None:
            text = f"{text} {self.unit.name}"
        return text

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        unit = f", unit={self.unit.name!r}" if self.unit is not None else ""
        return f"Value({self.type.name}, {self.payload!r}{unit})"
