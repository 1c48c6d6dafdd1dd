from typing import Callable, List, Optional

from loguru import logger

from .ast import AST, DEFAULT_MAX_DEPTH, ASTNode, Expression, Function, Parser, Variable
from .drawables import Drawable
from .errors import (
    DrawLangError,
    FunctionEvaluateError,
    NoMatchError,
    VarOnLeftExprError,
    format_error
)
from .impure import ImpureEvaluator, register_builtin_impure
from .patterns import Registries, RegistryBuilder
from .pure import PureEvaluator, register_builtin_pure


class EvalInfo:
    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, allow_empty: bool = True):
        self.max_depth = max_depth
        self.allow_empty = allow_empty


def build_default_registries(max_depth: int = DEFAULT_MAX_DEPTH) -> Registries:
    builder = RegistryBuilder(max_depth)
    register_builtin_pure(builder)
    register_builtin_impure(builder)
    return builder.build()


def _contains_variable(node: ASTNode) -> bool:
    """True if a template marker appears anywhere under ``node``."""
    stack = [node]
    while stack:
        node = stack.pop()
        if isinstance(node, Variable):
            return True
        if isinstance(node, Expression):
            stack.extend(node.children)
        elif isinstance(node, Function):
            stack.extend(node.args)
    return False


class ErrorHandler:
    def __init__(self):
        self.errors: List[str] = []

    def handle_error(self, error: DrawLangError, command: str = "") -> None:
        error_msg = format_error(command, error) if command else str(error)
        self.errors.append(error_msg)
        logger.warning(f"Command failed: {error}")

    def get_errors(self) -> List[str]:
        return self.errors.copy()

    def clear_errors(self) -> None:
        self.errors.clear()


class CommandProcessor:
    """Runs a command through parse, pure evaluation and drawing, in that order."""

    def __init__(self, registries: Optional[Registries] = None,
                 info: Optional[EvalInfo] = None):
        self.info = info or EvalInfo()
        self.registries = registries or build_default_registries()
        self.parser = Parser(self.info.max_depth)
        self.pure = PureEvaluator(self.registries)
        self.impure = ImpureEvaluator(self.registries)
        self.error_handler = ErrorHandler()

    def parse(self, cmd: str) -> AST:
        ast = AST(self.parser.parse(cmd))
        # {} and {..} belong in templates only
        if _contains_variable(ast.root):
            raise VarOnLeftExprError()
        logger.debug(f"Parsed {cmd!r}")
        return ast

    def evaluate_expression(self, cmd: str) -> AST:
        ast = self.parse(cmd)
        try:
            reduced = AST(self.pure.evaluate(ast.root))
            logger.debug(f"Reduced {cmd!r} -> {reduced}")
        except RecursionError:
            raise FunctionEvaluateError("Expression is nested too deeply to evaluate") from None
        return reduced

    def process_command(self, cmd: str) -> List[Drawable]:
        reduced = self.evaluate_expression(cmd)

        drawables: List[Drawable] = []
        try:
            self.impure.collect_drawables(reduced.root, drawables)
        except RecursionError:
            raise FunctionEvaluateError("Expression is nested too deeply to draw") from None

        if not drawables and not self.info.allow_empty:
            raise NoMatchError(cmd)

        logger.debug(f"Command {cmd!r} produced {len(drawables)} drawable(s)")
        return drawables

    def process_command_safe(self, cmd: str,
                             callback: Optional[Callable[[List[Drawable]], None]] = None
                             ) -> Optional[List[Drawable]]:
        try:
            result = self.process_command(cmd)
        except DrawLangError as e:
            self.error_handler.handle_error(e, cmd)
            return None

        if callback:
            callback(result)
        return result

    def get_error_handler(self) -> ErrorHandler:
        return self.error_handler
