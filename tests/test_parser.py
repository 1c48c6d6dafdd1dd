import random

import pytest

from drawlang.core import (
    AST,
    BracketNotClosedError,
    Expression,
    ExtraRightBracketError,
    Function,
    Identifier,
    InvalidSyntaxError,
    Number,
    ParseError,
    Parser,
    Variable,
    VariableKind,
    parse
)


NODE_TYPES = (Number, Identifier, Expression, Function, Variable)


class TestClassification:
    def test_call_with_comma_group(self):
        assert parse("point(3, 5)") == Function(
            "point", (Expression((Number(3), Number(5))),))

    def test_number(self):
        assert parse("42") == Number(42.0)
        assert parse("-2.5") == Number(-2.5)
        assert parse("  7.  ") == Number(7.0)

    def test_identifier(self):
        assert parse("_foo1") == Identifier("_foo1")

    def test_variable_markers(self):
        assert parse("{}") == Variable(VariableKind.NUMBER)
        assert parse("{..}") == Variable(VariableKind.NUMBER_TUPLE)

    def test_curried_call_flattens_arguments(self):
        assert parse("F(f)(x)") == Function("F", (Identifier("f"), Identifier("x")))

    def test_bracket_pairs_are_not_a_single_group(self):
        expected = Expression((Identifier("x"), Identifier("y")))
        assert parse("(x),(y)") == expected
        assert parse("((x),(y))") == expected

    def test_redundant_brackets_are_stripped(self):
        assert parse("((3))") == Number(3)
        assert parse("f((1))") == Function("f", (Number(1),))

    def test_top_level_commas(self):
        node = parse("123, point(4, 5, 6), 78")
        assert isinstance(node, Expression)
        assert len(node.children) == 3
        assert node.children[1] == Function(
            "point", (Expression((Number(4), Number(5), Number(6))),))

    def test_canonical_text(self):
        assert str(parse("point(3,5)")) == "point(3, 5)"
        assert str(parse("F(f)(x)")) == "F(f)(x)"
        assert str(parse("path({..})")) == "path({..})"
        assert str(AST.parse("add(1.5, {})")) == "add(1.5, {})"


class TestInfix:
    def test_precedence(self):
        assert parse("1 + 2 * 3") == parse("add(1, mul(2, 3))")

    def test_left_associative(self):
        assert parse("1 - 2 - 3") == parse("sub(sub(1, 2), 3)")
        assert parse("8 / 4 / 2") == parse("div(div(8, 4), 2)")

    def test_brackets_group(self):
        assert parse("(1 + 2) * 3") == parse("mul(add(1, 2), 3)")

    def test_unary_minus(self):
        assert parse("2 * -3") == parse("mul(2, -3)")
        assert parse("2 - -3") == parse("sub(2, -3)")
        assert parse("-x") == Function("neg", (Identifier("x"),))
        assert parse("-(4)") == Number(-4)

    def test_operators_inside_arguments(self):
        assert parse("point(1 + 2, f(3) * 4)") == parse("point(add(1, 2), mul(f(3), 4))")

    def test_missing_operand(self):
        with pytest.raises(InvalidSyntaxError) as exc:
            parse("1 +")
        assert exc.value.position == 3

    def test_mixed_chain_folds_left(self):
        assert parse("1 - 2 + 3") == parse("add(sub(1, 2), 3)")
        assert Parser(max_depth=2).parse("1 + 2 + 3 + 4 + 5") == parse(
            "add(add(add(add(1, 2), 3), 4), 5)")

    def test_flat_chain_is_not_nesting(self):
        node = parse(" + ".join(["1"] * 150))
        terms = 1
        while isinstance(node, Function):
            assert node.name == "add"
            node = node.args[0].children[0]
            terms += 1
        assert node == Number(1)
        assert terms == 150


class TestErrors:
    def test_extra_right_bracket(self):
        with pytest.raises(ExtraRightBracketError) as exc:
            parse("forgot)to_close_right_bracket")
        assert exc.value.position == 6

    def test_bracket_not_closed(self):
        with pytest.raises(BracketNotClosedError) as exc:
            parse("ex,left(bracket()")
        assert exc.value.position == 7

    def test_positions_are_absolute(self):
        with pytest.raises(BracketNotClosedError) as exc:
            parse("a, f(1)(2")
        assert exc.value.position == 7

        with pytest.raises(BracketNotClosedError) as exc:
            parse("   point(1, 2")
        assert exc.value.position == 8

    def test_offset_is_threaded(self):
        with pytest.raises(ExtraRightBracketError) as exc:
            parse("a)", offset=10)
        assert exc.value.position == 11

    def test_extra_right_bracket_after_call(self):
        with pytest.raises(ExtraRightBracketError) as exc:
            parse("point(1, 2))")
        assert exc.value.position == 11

    def test_empty_input(self):
        with pytest.raises(InvalidSyntaxError) as exc:
            parse("")
        assert exc.value.position == 0

    def test_empty_argument_group(self):
        with pytest.raises(InvalidSyntaxError) as exc:
            parse("f()")
        assert exc.value.position == 2

    def test_text_after_arguments(self):
        with pytest.raises(InvalidSyntaxError) as exc:
            parse("f(1)x")
        assert exc.value.position == 4

    def test_bad_function_name(self):
        with pytest.raises(InvalidSyntaxError):
            parse("3(1)")

    def test_unknown_token(self):
        with pytest.raises(InvalidSyntaxError):
            parse("1 2")

    def test_nesting_limit(self):
        deep = "(" * 60 + "1" + ")" * 60
        assert Parser(max_depth=100).parse(deep) == Number(1)
        with pytest.raises(InvalidSyntaxError, match="nesting too deep"):
            Parser(max_depth=50).parse(deep)

    def test_nesting_beyond_the_interpreter_stack(self):
        deep = "f(" * 1000 + "1" + ")" * 1000
        with pytest.raises(InvalidSyntaxError, match="nesting too deep") as exc:
            Parser(max_depth=100_000).parse(deep)
        assert exc.value.position == 0


def _random_command(rng: random.Random) -> str:
    tokens = ["1", "-2.5", "x", "foo", ",", "(", ")", " ", "f(", "3)"]
    return "".join(rng.choice(tokens) for _ in range(rng.randint(0, 12)))


def test_parse_never_crashes_on_token_soup():
    rng = random.Random(1234)
    for _ in range(500):
        command = _random_command(rng)
        try:
            node = parse(command)
        except ParseError as e:
            assert e.position is not None
            assert 0 <= e.position <= len(command)
        else:
            assert isinstance(node, NODE_TYPES)
