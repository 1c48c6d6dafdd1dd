"""Impure functions: calls that draw something.

A drawing call is like a print statement. It emits a drawable object and is
evaluated only after every pure call has been reduced to a literal.
"""

from typing import List

from loguru import logger

from .ast import AST, ASTNode, Expression, Function
from .drawables import Drawable, Path, Point, Polygon, Segment, pair_up
from .errors import ASTMatchError, FunctionEvaluateError, MatchError, NoMatchError
from .patterns import Registries, RegistryBuilder
from .variables import VariablePayload


class ImpureEvaluator:
    def __init__(self, registries: Registries):
        self.registries = registries

    def collect_drawables(self, node: ASTNode, out: List[Drawable]) -> None:
        """Append the drawables of ``node`` to ``out`` in post-order."""
        if isinstance(node, Expression):
            for child in node.children:
                self.collect_drawables(child, out)
        elif isinstance(node, Function):
            out.append(self._draw(node))

    def _draw(self, node: Function) -> Drawable:
        try:
            found = self.registries.impure.find(node)
        except MatchError as e:
            raise ASTMatchError(str(e)) from e

        if found is None:
            raise NoMatchError(str(node))

        pattern, captured = found
        drawable = pattern.call(captured)
        if not isinstance(drawable, Drawable):
            raise FunctionEvaluateError(
                f"Pattern {pattern.source} returned {type(drawable).__name__}, expected a drawable")

        logger.debug(f"Drew {drawable} via {pattern.source}")
        return drawable


def parse_draw(ast: AST, registries: Registries) -> List[Drawable]:
    drawables: List[Drawable] = []
    ImpureEvaluator(registries).collect_drawables(ast.root, drawables)
    return drawables


def _point(v: List[VariablePayload]) -> Point:
    return Point(v[0].number(), v[1].number())


def _segment(v: List[VariablePayload]) -> Segment:
    return Segment((v[0].number(), v[1].number()), (v[2].number(), v[3].number()))


def _path(v: List[VariablePayload]) -> Path:
    return Path(pair_up("path", v[0].tuple(), 2))


def _polygon(v: List[VariablePayload]) -> Polygon:
    return Polygon(pair_up("polygon", v[0].tuple(), 3))


def register_builtin_impure(builder: RegistryBuilder) -> None:
    builder.register_impure("point({}, {})", _point)
    builder.register_impure("line({}, {})({}, {})", _segment)
    builder.register_impure("path({..})", _path)
    builder.register_impure("polygon({..})", _polygon)
