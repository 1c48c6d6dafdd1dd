from .errors import (
    ErrorType,
    DrawLangError,
    ParseError,
    BracketNotClosedError,
    ExtraRightBracketError,
    ParseNumberError,
    InvalidSyntaxError,
    MatchError,
    VarOnLeftExprError,
    UnsupportedBindingError,
    PatternMatchError,
    NoMatchError,
    ASTMatchError,
    FunctionEvaluateError,
    PatternRegistrationError,
    format_error
)
from .variables import (
    VariableKind,
    VariablePayload
)
from .ast import (
    AST,
    ASTNode,
    Number,
    Identifier,
    Expression,
    Function,
    Variable,
    Parser,
    parse
)
from .matcher import match
from .patterns import (
    Pattern,
    PatternTable,
    Registries,
    RegistryBuilder
)
from .drawables import (
    Drawable,
    PointShape,
    LineShape,
    Point,
    Segment,
    Path,
    Polygon
)
from .pure import (
    PureEvaluator,
    evaluate_all,
    register_builtin_pure
)
from .impure import (
    ImpureEvaluator,
    parse_draw,
    register_builtin_impure
)
from .processor import (
    EvalInfo,
    ErrorHandler,
    CommandProcessor,
    build_default_registries
)

__all__ = [
    "ErrorType",
    "DrawLangError",
    "ParseError",
    "BracketNotClosedError",
    "ExtraRightBracketError",
    "ParseNumberError",
    "InvalidSyntaxError",
    "MatchError",
    "VarOnLeftExprError",
    "UnsupportedBindingError",
    "PatternMatchError",
    "NoMatchError",
    "ASTMatchError",
    "FunctionEvaluateError",
    "PatternRegistrationError",
    "format_error",
    "VariableKind",
    "VariablePayload",
    "AST",
    "ASTNode",
    "Number",
    "Identifier",
    "Expression",
    "Function",
    "Variable",
    "Parser",
    "parse",
    "match",
    "Pattern",
    "PatternTable",
    "Registries",
    "RegistryBuilder",
    "Drawable",
    "PointShape",
    "LineShape",
    "Point",
    "Segment",
    "Path",
    "Polygon",
    "PureEvaluator",
    "evaluate_all",
    "register_builtin_pure",
    "ImpureEvaluator",
    "parse_draw",
    "register_builtin_impure",
    "EvalInfo",
    "ErrorHandler",
    "CommandProcessor",
    "build_default_registries"
]
