"""Stack snapshot serialization.

Converts the contents of a ``Stack`` to and from a plain dict/list
structure that maps naturally to JSON and YAML.  Used by
``woflang run --dump`` to report the final stack of a script.

Usage
-----
::

    from woflang.snapshot import StackSerializer

    serializer = StackSerializer()
    text = serializer.to_yaml(interp.stack)
    values = serializer.from_yaml(text)
    assert values == interp.stack.to_list()
"""
from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

import yaml

from woflang.core.errors import TypeMismatchError
from woflang.core.value import Unit, Value, ValueType


class StackSerializer:
    """Converts between stack contents and JSON-compatible dicts.

    Each value is stored with a ``"type"`` discriminator so that the
    INTEGER/FLOAT distinction survives formats that do not preserve it.
    """

    # ------------------------------------------------------------------
    # Serialization (values → dict)
    # ------------------------------------------------------------------

    def to_dict(self, values: Iterable[Value]) -> dict[str, Any]:
        """Serialize stack contents, bottom first."""
        items = [self._value_to_dict(v) for v in values]
        return {"depth": len(items), "values": items}

    def _value_to_dict(self, value: Value) -> dict[str, Any]:
        data: dict[str, Any] = {"type": value.type.name.lower(), "value": value.payload}
        if value.unit is not None:
            data["unit"] = {"name": value.unit.name, "scale": value.unit.scale}
        return data

    def to_json(self, values: Iterable[Value], indent: int | None = 2) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict(values), indent=indent, ensure_ascii=False)

    def to_yaml(self, values: Iterable[Value]) -> str:
        """Serialize to a YAML string."""
        return yaml.dump(self.to_dict(values), default_flow_style=False, allow_unicode=True, sort_keys=False)

    # ------------------------------------------------------------------
    # Deserialization (dict → values)
    # ------------------------------------------------------------------

    def from_dict(self, data: dict[str, Any]) -> list[Value]:
        """Rebuild the list of values from ``to_dict`` output."""
        return [self._value_from_dict(item) for item in data.get("values", [])]

    def _value_from_dict(self, data: dict[str, Any]) -> Value:
        try:
            kind = ValueType[str(data["type"]).upper()]
        except KeyError as exc:
            raise TypeMismatchError("a value type", data.get("type"), "snapshot") from exc
        payload = data["value"]
        if kind is ValueType.INTEGER:
            value = Value.from_integer(payload)
        elif kind is ValueType.FLOAT:
            value = Value.from_float(payload)
        elif kind is ValueType.STRING:
            value = Value.from_string(payload)
        else:
            value = Value.from_symbol(payload)
        unit = data.get("unit")
        if unit is not None:
            value = value.with_unit(Unit(unit["name"], float(unit.get("scale", 1.0))))
        return value

    def from_json(self, text: str) -> list[Value]:
        """Deserialize from a JSON string."""
        return self.from_dict(json.loads(text))

    def from_yaml(self, text: str) -> list[Value]:
        """Deserialize from a YAML string."""
        return self.from_dict(yaml.safe_load(text))
