import pytest

from drawlang.core import (
    FunctionEvaluateError,
    UnsupportedBindingError,
    VarOnLeftExprError,
    VariableKind,
    VariablePayload,
    match,
    parse
)


class TestMatch:
    def test_captures_numbers(self):
        assert match(parse("point(3,5)"), parse("point({}, {})")) == [3.0, 5.0]

    def test_name_mismatch_is_not_an_error(self):
        assert match(parse("point(3,5)"), parse("line({}, {})")) is None

    def test_arity_mismatch(self):
        assert match(parse("add(1)(2)"), parse("add({}, {})")) is None
        assert match(parse("point(1, 2, 3)"), parse("point({}, {})")) is None

    def test_literals_must_be_equal(self):
        assert match(parse("f(1, x)"), parse("f({}, x)")) == [1.0]
        assert match(parse("f(1, y)"), parse("f({}, x)")) is None
        assert match(parse("f(2)"), parse("f(1)")) is None
        assert match(parse("f(1)"), parse("f(1)")) == []

    def test_captures_in_template_preorder(self):
        captured = match(parse("g(1)(h(2, 3), 4)"), parse("g({})(h({}, {}), {})"))
        assert captured == [1.0, 2.0, 3.0, 4.0]

    def test_node_kind_mismatch(self):
        assert match(parse("f((1, 2))"), parse("f({})")) is None
        assert match(parse("f(g(1))"), parse("f({})")) is None
        assert match(parse("f(x)"), parse("f(1)")) is None

    def test_variable_in_input_is_fatal(self):
        with pytest.raises(VarOnLeftExprError):
            match(parse("{}"), parse("1"))
        with pytest.raises(VarOnLeftExprError):
            match(parse("point({}, 1)"), parse("point({}, {})"))

    def test_identifier_binding_is_rejected(self):
        with pytest.raises(UnsupportedBindingError) as exc:
            match(parse("point(x, 1)"), parse("point({}, {})"))
        assert exc.value.name == "x"

    def test_failed_match_discards_partial_captures(self):
        assert match(parse("f(1)(2)"), parse("f({})(3)")) is None


class TestTupleCapture:
    def test_captures_number_group(self):
        captured = match(parse("path(0, 1, 2, 3)"), parse("path({..})"))
        assert captured == [VariablePayload.of_tuple([0, 1, 2, 3])]
        assert captured[0].tuple() == (0.0, 1.0, 2.0, 3.0)

    def test_group_with_identifiers_does_not_match(self):
        assert match(parse("path(0, x)"), parse("path({..})")) is None

    def test_single_number_does_not_match(self):
        assert match(parse("path(5)"), parse("path({..})")) is None


class TestVariablePayload:
    def test_number_access(self):
        payload = VariablePayload.of_number(2)
        assert payload.kind is VariableKind.NUMBER
        assert payload.number() == 2.0
        assert float(payload) == 2.0
        assert payload == 2

    def test_wrong_kind_access(self):
        with pytest.raises(FunctionEvaluateError):
            VariablePayload.of_number(1).tuple()
        with pytest.raises(FunctionEvaluateError):
            VariablePayload.of_tuple([1, 2]).number()

    def test_tuple_never_equals_number(self):
        assert VariablePayload.of_tuple([1]) != 1

    def test_number_payload_hashes_like_its_value(self):
        payload = VariablePayload.of_number(2)
        assert hash(payload) == hash(2.0)
        assert 2.0 in {payload}
        assert len({payload, VariablePayload.of_number(2.0)}) == 1
