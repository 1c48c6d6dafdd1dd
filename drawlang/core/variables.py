from enum import Enum
from typing import Tuple, Union

from .errors import FunctionEvaluateError


class VariableKind(Enum):
    NUMBER = "{}"
    NUMBER_TUPLE = "{..}"

    @classmethod
    def from_marker(cls, marker: str) -> 'VariableKind':
        for kind in cls:
            if kind.value == marker:
                return kind
        raise ValueError(f"Unknown variable marker: {marker}")


class VariablePayload:
    """A value captured at a template variable, handed positionally to pattern behaviors."""

    __slots__ = ("kind", "value")

    def __init__(self, kind: VariableKind, value: Union[float, Tuple[float, ...]]):
        self.kind = kind
        self.value = value

    @classmethod
    def of_number(cls, value: float) -> 'VariablePayload':
        return cls(VariableKind.NUMBER, float(value))

    @classmethod
    def of_tuple(cls, values) -> 'VariablePayload':
        return cls(VariableKind.NUMBER_TUPLE, tuple(float(v) for v in values))

    def number(self) -> float:
        if self.kind is not VariableKind.NUMBER:
            raise FunctionEvaluateError(f"Type mismatch: expected a number, got {self!r}")
        return self.value

    def tuple(self) -> Tuple[float, ...]:
        if self.kind is not VariableKind.NUMBER_TUPLE:
            raise FunctionEvaluateError(f"Type mismatch: expected a number tuple, got {self!r}")
        return self.value

    def __float__(self) -> float:
        return self.number()

    def __eq__(self, other) -> bool:
        if isinstance(other, VariablePayload):
            return self.kind is other.kind and self.value == other.value
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return self.kind is VariableKind.NUMBER and self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        # equal to a plain float, so it must hash like one
        if self.kind is VariableKind.NUMBER:
            return hash(self.value)
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        return f"Var({self.value})"
