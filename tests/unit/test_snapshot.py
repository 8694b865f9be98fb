"""Unit tests for woflang.snapshot — StackSerializer."""
from __future__ import annotations

import json

import pytest
import yaml

from woflang.core.errors import TypeMismatchError
from woflang.core.stack import Stack
from woflang.core.value import Unit, Value
from woflang.snapshot import StackSerializer


@pytest.fixture()
def serializer() -> StackSerializer:
    return StackSerializer()


@pytest.fixture()
def mixed_stack() -> Stack:
    return Stack([
        Value.from_integer(2),
        Value.from_float(2.0),
        Value.from_string("hello world"),
        Value.from_symbol("π"),
        Value.from_float(9.81).with_unit(Unit("m/s^2")),
    ])


class TestToDict:
    def test_empty_stack(self, serializer: StackSerializer) -> None:
        assert serializer.to_dict(Stack()) == {"depth": 0, "values": []}

    def test_values_are_tagged(self, serializer: StackSerializer, mixed_stack: Stack) -> None:
        data = serializer.to_dict(mixed_stack)
        assert data["depth"] == 5
        assert [item["type"] for item in data["values"]] == [
            "integer", "float", "string", "symbol", "float",
        ]

    def test_unit_is_included_only_when_present(
        self, serializer: StackSerializer, mixed_stack: Stack
    ) -> None:
        values = serializer.to_dict(mixed_stack)["values"]
        assert "unit" not in values[0]
        assert values[-1]["unit"] == {"name": "m/s^2", "scale": 1.0}


class TestFormats:
    def test_json_is_valid(self, serializer: StackSerializer, mixed_stack: Stack) -> None:
        data = json.loads(serializer.to_json(mixed_stack))
        assert data["values"][3]["value"] == "π"

    def test_yaml_keeps_key_order(self, serializer: StackSerializer, mixed_stack: Stack) -> None:
        text = serializer.to_yaml(mixed_stack)
        assert text.startswith("depth: 5")
        assert yaml.safe_load(text)["depth"] == 5

    def test_json_restores_integer_float_distinction(
        self, serializer: StackSerializer, mixed_stack: Stack
    ) -> None:
        assert serializer.from_json(serializer.to_json(mixed_stack)) == mixed_stack.to_list()

    def test_yaml_restores_units(self, serializer: StackSerializer, mixed_stack: Stack) -> None:
        restored = serializer.from_yaml(serializer.to_yaml(mixed_stack))
        assert restored[-1].unit == Unit("m/s^2")


class TestFromDict:
    def test_unknown_type_raises(self, serializer: StackSerializer) -> None:
        with pytest.raises(TypeMismatchError):
            serializer.from_dict({"values": [{"type": "complex", "value": 1}]})

    def test_missing_values_key_gives_empty_list(self, serializer: StackSerializer) -> None:
        assert serializer.from_dict({}) == []
