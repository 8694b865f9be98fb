"""The LIFO data stack shared by every operator handler."""
from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

from woflang.core.errors import IntegerOverflowError, StackUnderflowError, TypeMismatchError
from woflang.core.value import INT64_MAX, INT64_MIN, Value, ValueType

_FALSE_WORDS = frozenset({"0", "false", "False"})


class Stack:
    """Ordered, growable sequence of ``Value`` accessed from the top.

    Index 0 is the bottom of the stack.  Popping from an empty stack
    raises ``StackUnderflowError``; the depth can never go negative.

    Parameters
    ----------
    values:
        Optional initial contents, bottom first.
    """

    __slots__ = ("_items",)

    def __init__(self, values: Iterable[Value] = ()) -> None:
        self._items: list[Value] = list(values)

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    def push(self, value: Value) -> None:
        """Push ``value`` on top of the stack."""
        if not isinstance(value, Value):
            raise TypeMismatchError("Value", value, "push")
        self._items.append(value)

    def pop(self, operator: str = "pop") -> Value:
        """Remove and return the top value."""
        if not self._items:
            raise StackUnderflowError(operator, 1, 0)
        return self._items.pop()

    def peek(self, operator: str = "peek") -> Value:
        """Return the top value without removing it."""
        if not self._items:
            raise StackUnderflowError(operator, 1, 0)
        return self._items[-1]

    def has(self, n: int) -> bool:
        """Return True if at least ``n`` values are present."""
        return len(self._items) >= n

    def require(self, n: int, operator: str) -> None:
        """Raise ``StackUnderflowError`` unless ``n`` values are present."""
        if len(self._items) < n:
            raise StackUnderflowError(operator, n, len(self._items))

    def swap(self, operator: str = "swap") -> None:
        """Exchange the top two values in place."""
        self.require(2, operator)
        self._items[-1], self._items[-2] = self._items[-2], self._items[-1]

    def clear(self) -> None:
        """Remove every value."""
        self._items.clear()

    @property
    def depth(self) -> int:
        """Number of values on the stack."""
        return len(self._items)

    # ------------------------------------------------------------------
    # Typed pops
    # ------------------------------------------------------------------

    def pop_numeric(self, operator: str = "pop_numeric") -> float:
        """Pop the top value and return it as a float."""
        value = self.pop(operator)
        if not value.is_numeric:
            raise TypeMismatchError("a numeric value", value.to_text(), operator)
        return float(value.payload)

    def pop_int(self, operator: str = "pop_int") -> int:
        """Pop a numeric value as an int, rounding floats half away from zero."""
        value = self.pop(operator)
        if value.type is ValueType.INTEGER:
            return int(value.payload)
        if value.type is ValueType.FLOAT:
            number = float(value.payload)
            if not math.isfinite(number):
                raise TypeMismatchError("a finite number", value.to_text(), operator)
            magnitude = int(abs(number) + 0.5)
            result = magnitude if number >= 0 else -magnitude
            if not INT64_MIN <= result <= INT64_MAX:
                raise IntegerOverflowError(result)
            return result
        raise TypeMismatchError("a numeric value", value.to_text(), operator)

    def pop_string(self, operator: str = "pop_string") -> str:
        """Pop a STRING or SYMBOL value and return its text."""
        value = self.pop(operator)
        if value.type in (ValueType.STRING, ValueType.SYMBOL):
            return str(value.payload)
        raise TypeMismatchError("a string", value.to_text(), operator)

    def pop_symbol(self, operator: str = "pop_symbol") -> str:
        """Pop a SYMBOL value and return its text."""
        value = self.pop(operator)
        if value.type is ValueType.SYMBOL:
            return str(value.payload)
        raise TypeMismatchError("a symbol", value.to_text(), operator)

    def pop_bool(self, operator: str = "pop_bool") -> bool:
        """Pop any value and interpret it as a truth value."""
        value = self.pop(operator)
        if value.is_numeric:
            return value.payload != 0
        text = str(value.payload)
        return bool(text) and text not in _FALSE_WORDS

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Value:
        return self._items[index]

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Stack):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Stack({self._items!r})"

    def to_list(self) -> list[Value]:
        """Return a shallow copy of the contents, bottom first."""
        return list(self._items)
