from enum import Enum
from typing import Optional


class ErrorType(Enum):
    BRACKET_NOT_CLOSED = "BracketNotClosed"
    EXTRA_RIGHT_BRACKET = "ExtraRightBracket"
    PARSE_NUMBER_FAIL = "ParseNumberFail"
    INVALID_SYNTAX = "InvalidSyntax"
    VAR_ON_LEFT_EXPR = "VarOnLeftExpr"
    UNSUPPORTED_BINDING = "UnsupportedBinding"
    NO_MATCH = "NoMatch"
    AST_MATCH_ERROR = "ASTMatchError"
    FUNCTION_EVALUATE_ERROR = "FunctionEvaluateError"
    PATTERN_REGISTRATION = "PatternRegistration"


class DrawLangError(Exception):
    def __init__(self, error_type: ErrorType, message: Optional[str] = None,
                 position: Optional[int] = None):
        self.error_type = error_type
        self.message = message
        self.position = position
        super().__init__(self.get_error_message())

    def get_error_message(self) -> str:
        base_message = self.error_type.value
        if self.message and self.position is not None:
            return f"{base_message} at char {self.position}: {self.message}"
        if self.message:
            return f"{base_message}: {self.message}"
        if self.position is not None:
            return f"{base_message} at char {self.position}"
        return base_message

    def __str__(self) -> str:
        return self.get_error_message()


class ParseError(DrawLangError):
    """Raised while turning command text into an AST."""


class BracketNotClosedError(ParseError):
    def __init__(self, position: int, message: Optional[str] = None):
        super().__init__(ErrorType.BRACKET_NOT_CLOSED, message, position)


class ExtraRightBracketError(ParseError):
    def __init__(self, position: int, message: Optional[str] = None):
        super().__init__(ErrorType.EXTRA_RIGHT_BRACKET, message, position)


class ParseNumberError(ParseError):
    def __init__(self, position: int, text: str):
        super().__init__(ErrorType.PARSE_NUMBER_FAIL, f"Got {text}", position)


class InvalidSyntaxError(ParseError):
    def __init__(self, position: int, message: Optional[str] = None):
        super().__init__(ErrorType.INVALID_SYNTAX, message, position)


class MatchError(DrawLangError):
    """Raised by the matcher when a comparison cannot be decided at all."""


class VarOnLeftExprError(MatchError):
    def __init__(self, message: str = "Template variable found in the input expression"):
        super().__init__(ErrorType.VAR_ON_LEFT_EXPR, message)


class UnsupportedBindingError(MatchError):
    def __init__(self, name: str):
        super().__init__(
            ErrorType.UNSUPPORTED_BINDING,
            f"Binding identifier '{name}' to a template variable is not supported"
        )
        self.name = name


class PatternMatchError(DrawLangError):
    pass


class NoMatchError(PatternMatchError):
    def __init__(self, expression: Optional[str] = None):
        message = f"No drawing pattern matches {expression}" if expression else None
        super().__init__(ErrorType.NO_MATCH, message)


class ASTMatchError(PatternMatchError):
    def __init__(self, detail: str):
        super().__init__(ErrorType.AST_MATCH_ERROR, f"Invalid syntax: {detail}")
        self.detail = detail


class FunctionEvaluateError(DrawLangError):
    def __init__(self, message: str):
        super().__init__(ErrorType.FUNCTION_EVALUATE_ERROR, message)


class PatternRegistrationError(DrawLangError):
    """Malformed built-in pattern; raised while building registries, never per command."""

    def __init__(self, template: str, message: str):
        super().__init__(ErrorType.PATTERN_REGISTRATION, f"{template}: {message}")
        self.template = template


def format_error(text: str, error: DrawLangError) -> str:
    """Render an error message, pointing a caret at the offending character."""
    if error.position is None:
        return str(error)
    caret = " " * min(error.position, len(text)) + "^"
    return f"{text}\n{caret}\n{error}"
