"""Abstract syntax tree of a command and the structural parser that builds it.

A command is classified top-down: template variables, numbers, identifiers,
bracketed groups, then anything containing brackets, commas or arithmetic is
spliced into smaller pieces and parsed recursively. Every error position is an
absolute offset into the original command string.
"""

import math
import re
from dataclasses import dataclass
from typing import List, Tuple, Union

from .errors import (
    BracketNotClosedError,
    ExtraRightBracketError,
    InvalidSyntaxError,
    ParseNumberError
)
from .variables import VariableKind


IS_NUMBER = re.compile(r'^-?\d+\.?\d*$')
IS_IDENT = re.compile(r'^[A-Za-z_][A-Za-z_0-9]*$')

SPLICE_CHARS = "(,+-*/"
OPERATOR_GROUPS = ("+-", "*/")
OPERATOR_NAMES = {'+': 'add', '-': 'sub', '*': 'mul', '/': 'div'}

DEFAULT_MAX_DEPTH = 100


def format_number(value: float) -> str:
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class Number:
    value: float

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Identifier:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Expression:
    children: Tuple['ASTNode', ...]

    def __str__(self) -> str:
        return ', '.join(str(child) for child in self.children)


@dataclass(frozen=True)
class Function:
    name: str
    args: Tuple['ASTNode', ...]

    def __str__(self) -> str:
        return self.name + ''.join(f"({arg})" for arg in self.args)


@dataclass(frozen=True)
class Variable:
    kind: VariableKind = VariableKind.NUMBER

    def __str__(self) -> str:
        return self.kind.value


ASTNode = Union[Number, Identifier, Expression, Function, Variable]


@dataclass(frozen=True)
class AST:
    root: ASTNode

    @classmethod
    def parse(cls, text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> 'AST':
        return cls(Parser(max_depth).parse(text))

    def __str__(self) -> str:
        return str(self.root)


class Parser:
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth

    def parse(self, text: str, offset: int = 0) -> ASTNode:
        try:
            return self._parse(text, offset, 0)
        except RecursionError:
            # max_depth set above what the interpreter stack can hold
            raise InvalidSyntaxError(offset, "nesting too deep") from None

    def _parse(self, text: str, offset: int, level: int) -> ASTNode:
        if level > self.max_depth:
            raise InvalidSyntaxError(offset, "nesting too deep")

        s = text.strip()
        offset += len(text) - len(text.lstrip())

        if s in (VariableKind.NUMBER.value, VariableKind.NUMBER_TUPLE.value):
            return Variable(VariableKind.from_marker(s))

        if IS_NUMBER.match(s):
            return Number(self._parse_number(s, offset))

        if IS_IDENT.match(s):
            return Identifier(s)

        if self._is_wrapped(s):
            return self._parse(s[1:-1], offset + 1, level + 1)

        if any(c in s for c in SPLICE_CHARS):
            return self._splice(s, offset, level)

        close = s.find(')')
        if close >= 0:
            raise ExtraRightBracketError(offset + close)

        raise InvalidSyntaxError(offset, f"Failed to match any known patterns - got ({s})")

    def _parse_number(self, s: str, offset: int) -> float:
        try:
            return float(s)
        except ValueError:
            raise ParseNumberError(offset, s)

    def _is_wrapped(self, s: str) -> bool:
        if not (s.startswith('(') and s.endswith(')')):
            return False

        depth = 0
        for i, char in enumerate(s):
            if char == '(':
                depth += 1
            elif char == ')':
                depth -= 1
                if depth == 0:
                    return i == len(s) - 1
        return False

    def _splice(self, s: str, offset: int, level: int) -> ASTNode:
        segments: List[Tuple[str, int]] = []
        start = 0
        depth = 0

        for i, char in enumerate(s):
            if char == '(':
                depth += 1
            elif char == ')':
                depth -= 1
                if depth < 0:
                    raise ExtraRightBracketError(offset + i)
            elif char == ',' and depth == 0:
                segments.append((s[start:i], start))
                start = i + 1

        if segments:
            segments.append((s[start:], start))
            return Expression(tuple(
                self._parse(segment, offset + pos, level + 1)
                for segment, pos in segments
            ))

        operators = self._find_operators(s)
        if operators:
            return self._split_operators(s, operators, offset, level)

        if s.startswith('-'):
            return self._negate(s, offset, level)

        return self._splice_call(s, offset, level)

    def _find_operators(self, s: str) -> List[int]:
        """Positions of the top-level binary operators of the loosest group present."""
        for group in OPERATOR_GROUPS:
            depth = 0
            found = []
            for i, char in enumerate(s):
                if char == '(':
                    depth += 1
                elif char == ')':
                    depth -= 1
                elif depth == 0 and char in group and not self._is_unary(s, i):
                    found.append(i)
            if found:
                return found
        return []

    def _is_unary(self, s: str, i: int) -> bool:
        if s[i] != '-':
            return False
        before = s[:i].rstrip()
        return not before or before[-1] in "+-*/,("

    def _split_operators(self, s: str, operators: List[int], offset: int, level: int) -> Function:
        # a flat chain is one level of nesting; fold it left to right
        bounds = [-1] + operators + [len(s)]
        operands = [
            self._parse_operand(s[start + 1:end], offset + start + 1, level)
            for start, end in zip(bounds, bounds[1:])
        ]

        node = operands[0]
        for pos, right in zip(operators, operands[1:]):
            node = Function(OPERATOR_NAMES[s[pos]], (Expression((node, right)),))
        return node

    def _parse_operand(self, text: str, offset: int, level: int) -> ASTNode:
        if not text.strip():
            raise InvalidSyntaxError(offset, "Missing operand")
        return self._parse(text, offset, level + 1)

    def _negate(self, s: str, offset: int, level: int) -> ASTNode:
        operand = self._parse_operand(s[1:], offset + 1, level)
        if isinstance(operand, Number):
            return Number(-operand.value)
        return Function('neg', (operand,))

    def _splice_call(self, s: str, offset: int, level: int) -> Function:
        """Handles the call syntax ident(args1)(args2)...(argsN)."""
        first = s.find('(')
        if first < 0:
            raise InvalidSyntaxError(offset, f"Failed to match any known patterns - got ({s})")

        groups: List[Tuple[int, int]] = []
        depth = 0
        open_pos = first

        for i in range(first, len(s)):
            char = s[i]
            if char == '(':
                if depth == 0:
                    open_pos = i
                depth += 1
            elif char == ')':
                depth -= 1
                if depth < 0:
                    raise ExtraRightBracketError(offset + i)
                if depth == 0:
                    groups.append((open_pos + 1, i))
            elif depth == 0 and not char.isspace():
                raise InvalidSyntaxError(offset + i, f"Unexpected '{char}' after argument list")

        if depth > 0:
            raise BracketNotClosedError(offset + open_pos)

        name = s[:first].strip()
        if not IS_IDENT.match(name):
            raise InvalidSyntaxError(offset, f"Invalid function identifier '{name}'")

        return Function(name, tuple(
            self._parse(s[start:end], offset + start, level + 1)
            for start, end in groups
        ))


def parse(text: str, offset: int = 0, max_depth: int = DEFAULT_MAX_DEPTH) -> ASTNode:
    return Parser(max_depth).parse(text, offset)
