"""Pure functions: rewrite rules that replace a call node with its value.

This is a small eager functional language over floats. ``add(1, 2)`` is
rewritten to ``3`` before anything is drawn. Calls to drawing functions are
left in place for the impure stage.
"""

import operator
from typing import Callable, List

from loguru import logger

from .ast import AST, ASTNode, Expression, Function, Identifier, Number, Variable
from .errors import ASTMatchError, FunctionEvaluateError, MatchError, NoMatchError
from .patterns import Registries, RegistryBuilder
from .variables import VariablePayload


NODE_TYPES = (Number, Identifier, Expression, Function, Variable)


class PureEvaluator:
    def __init__(self, registries: Registries):
        self.registries = registries

    def evaluate(self, node: ASTNode) -> ASTNode:
        if isinstance(node, Expression):
            return Expression(tuple(self.evaluate(child) for child in node.children))

        if isinstance(node, Function):
            evaluated = Function(node.name, tuple(self.evaluate(arg) for arg in node.args))

            # drawing calls are deferred to the impure stage
            if self.registries.is_impure(node.name):
                return evaluated

            return self._apply(evaluated)

        return node

    def _apply(self, node: Function) -> ASTNode:
        if not self.registries.is_pure(node.name):
            raise NoMatchError(str(node))

        try:
            found = self.registries.pure.find(node)
        except MatchError as e:
            raise ASTMatchError(str(e)) from e

        if found is None:
            raise FunctionEvaluateError(f"Function does not match any known patterns: {node}")

        pattern, captured = found
        result = _as_node(pattern.call(captured), pattern.source)
        logger.debug(f"Rewrote {node} -> {result} via {pattern.source}")
        return result


def _as_node(result, source: str) -> ASTNode:
    if isinstance(result, NODE_TYPES):
        return result
    if isinstance(result, (int, float)) and not isinstance(result, bool):
        return Number(float(result))
    raise FunctionEvaluateError(
        f"Pattern {source} returned {type(result).__name__}, expected an AST node")


def evaluate_all(ast: AST, registries: Registries) -> AST:
    return AST(PureEvaluator(registries).evaluate(ast.root))


def _arithmetic(op: Callable[[float, float], float]) -> Callable[[List[VariablePayload]], Number]:
    def behavior(v: List[VariablePayload]) -> Number:
        return Number(op(v[0].number(), v[1].number()))
    return behavior


def _divide(v: List[VariablePayload]) -> Number:
    divisor = v[1].number()
    if divisor == 0:
        raise FunctionEvaluateError("Cannot divide by zero")
    return Number(v[0].number() / divisor)


def _negate(v: List[VariablePayload]) -> Number:
    return Number(-v[0].number())


def _choose(v: List[VariablePayload]) -> Number:
    if v[0].number() != 0:
        return Number(v[1].number())
    return Number(v[2].number())


ARITHMETIC = (
    ("add", _arithmetic(operator.add)),
    ("sub", _arithmetic(operator.sub)),
    ("mul", _arithmetic(operator.mul)),
    ("div", _divide),
)


def register_builtin_pure(builder: RegistryBuilder) -> None:
    for name, behavior in ARITHMETIC:
        builder.register_pure(f"{name}({{}}, {{}})", behavior)
        builder.register_pure(f"{name}({{}})({{}})", behavior)

    builder.register_pure("neg({})", _negate)
    builder.register_pure("if({})({})({})", _choose)
    builder.register_pure("if({}, {}, {})", _choose)
