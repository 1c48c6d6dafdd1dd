"""Structural unification of an input AST against a template AST."""

from typing import List, Optional

from .ast import ASTNode, Expression, Function, Identifier, Number, Variable
from .errors import UnsupportedBindingError, VarOnLeftExprError
from .variables import VariableKind, VariablePayload


def match(node: ASTNode, template: ASTNode) -> Optional[List[VariablePayload]]:
    """Match ``node`` against ``template``.

    Returns the captured payloads in pre-order of the template, or None when
    the shapes or literals differ. Raises a ``MatchError`` when the match
    cannot be decided.
    """
    captured: List[VariablePayload] = []
    if not _match_recursive(node, template, captured):
        return None
    return captured


def _match_recursive(node: ASTNode, template: ASTNode,
                     captured: List[VariablePayload]) -> bool:
    if isinstance(node, Variable):
        raise VarOnLeftExprError()

    if isinstance(template, Variable):
        return _bind(node, template, captured)

    if isinstance(node, Number) and isinstance(template, Number):
        return node.value == template.value

    if isinstance(node, Identifier) and isinstance(template, Identifier):
        return node.name == template.name

    if isinstance(node, Expression) and isinstance(template, Expression):
        return _match_all(node.children, template.children, captured)

    if isinstance(node, Function) and isinstance(template, Function):
        if node.name != template.name:
            return False
        return _match_all(node.args, template.args, captured)

    return False


def _match_all(nodes, templates, captured: List[VariablePayload]) -> bool:
    if len(nodes) != len(templates):
        return False

    for node, template in zip(nodes, templates):
        if not _match_recursive(node, template, captured):
            return False
    return True


def _bind(node: ASTNode, variable: Variable, captured: List[VariablePayload]) -> bool:
    if isinstance(node, Identifier):
        raise UnsupportedBindingError(node.name)

    if variable.kind is VariableKind.NUMBER:
        if isinstance(node, Number):
            captured.append(VariablePayload.of_number(node.value))
            return True
        return False

    if isinstance(node, Expression) and all(isinstance(c, Number) for c in node.children):
        captured.append(VariablePayload.of_tuple(c.value for c in node.children))
        return True
    return False
