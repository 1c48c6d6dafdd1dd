import threading
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from loguru import logger

from .ast import AST, ASTNode, DEFAULT_MAX_DEPTH, Function, Parser
from .errors import ParseError, PatternRegistrationError
from .matcher import match
from .variables import VariablePayload


Behavior = Callable[[List[VariablePayload]], Any]


class Pattern:
    """A compiled template together with the behavior invoked on a match."""

    def __init__(self, source: str, template: AST, behavior: Behavior):
        self.source = source
        self.template = template
        self.behavior = behavior

    @property
    def name(self) -> str:
        return self.template.root.name

    def matches(self, node: ASTNode) -> Optional[List[VariablePayload]]:
        return match(node, self.template.root)

    def call(self, payloads: List[VariablePayload]) -> Any:
        return self.behavior(payloads)

    def __repr__(self) -> str:
        return f"Pattern({self.source})"


class PatternTable:
    """Read-only table of patterns, scanned in registration order."""

    def __init__(self, patterns: Tuple[Pattern, ...] = ()):
        self._patterns = tuple(patterns)
        self._names = frozenset(p.name for p in self._patterns)
        self._lock = threading.Lock()

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._patterns)

    @property
    def names(self) -> frozenset:
        return self._names

    def find(self, node: ASTNode) -> Optional[Tuple[Pattern, List[VariablePayload]]]:
        """Return the first pattern matching ``node`` and its captured payloads."""
        with self._lock:
            for pattern in self._patterns:
                captured = pattern.matches(node)
                if captured is not None:
                    return pattern, captured
        return None


@dataclass(frozen=True)
class Registries:
    pure: PatternTable
    impure: PatternTable

    def is_impure(self, name: str) -> bool:
        return name in self.impure

    def is_pure(self, name: str) -> bool:
        return name in self.pure


class RegistryBuilder:
    """Collects pattern registrations and builds immutable ``Registries``.

    Usable directly or as a decorator::

        builder = RegistryBuilder()

        @builder.register_pure("add({}, {})")
        def add(v):
            return Number(v[0].number() + v[1].number())
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self._parser = Parser(max_depth)
        self._pure: List[Pattern] = []
        self._impure: List[Pattern] = []

    def register_pure(self, template: str, behavior: Optional[Behavior] = None):
        return self._register(self._pure, self._impure, "pure", template, behavior)

    def register_impure(self, template: str, behavior: Optional[Behavior] = None):
        return self._register(self._impure, self._pure, "impure", template, behavior)

    def _register(self, table: List[Pattern], other: List[Pattern], kind: str,
                  template: str, behavior: Optional[Behavior]):
        if behavior is None:
            def decorator(func: Behavior) -> Behavior:
                self._register(table, other, kind, template, func)
                return func
            return decorator

        pattern = Pattern(template, self._compile(template), behavior)

        if any(p.name == pattern.name for p in other):
            raise PatternRegistrationError(
                template, f"'{pattern.name}' is already registered as a non-{kind} pattern")

        if any(p.template == pattern.template for p in table):
            raise PatternRegistrationError(template, f"duplicate {kind} pattern")

        table.append(pattern)
        return pattern

    def _compile(self, template: str) -> AST:
        try:
            root = self._parser.parse(template)
        except ParseError as e:
            raise PatternRegistrationError(template, f"failed to compile: {e}") from e

        if not isinstance(root, Function):
            raise PatternRegistrationError(template, "pattern root is not a function")

        return AST(root)

    def build(self) -> Registries:
        registries = Registries(
            pure=PatternTable(tuple(self._pure)),
            impure=PatternTable(tuple(self._impure))
        )
        logger.info(
            f"Built pattern registries: {len(registries.pure)} pure, "
            f"{len(registries.impure)} impure"
        )
        return registries
