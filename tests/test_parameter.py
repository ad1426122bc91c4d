import pytest
from pydantic import ValidationError

from flagline.exceptions import (
    InvalidParameterError,
    InvalidRangeError,
    SchemaSealedError,
    UnknownDataTypeError,
)
from flagline.parameter import NumericRange, Parameter, parse_alias
from flagline.parser.parser_types import ArgumentKind, DataType


class TestNumericRange:
    @pytest.mark.parametrize(
        "text, minimum, maximum, min_inclusive, max_inclusive",
        [
            ("[0, 10]", 0, 10, True, True),
            ("(0,10)", 0, 10, False, False),
            (" ( -1.5 , 2 ] ", -1.5, 2, False, True),
            ("[.5, 1)", 0.5, 1, True, False),
        ],
    )
    def test_parse(self, text, minimum, maximum, min_inclusive, max_inclusive):
        bounds = NumericRange.parse(text)
        assert bounds.minimum == minimum
        assert bounds.maximum == maximum
        assert bounds.min_inclusive is min_inclusive
        assert bounds.max_inclusive is max_inclusive

    @pytest.mark.parametrize(
        "text", ["0, 10", "[0 10]", "[a, b]", "{0, 1}", "[10, 0]", "[1, 1]"]
    )
    def test_parse_rejects(self, text):
        with pytest.raises(InvalidRangeError):
            NumericRange.parse(text)

    def test_min_must_be_below_max(self):
        with pytest.raises(InvalidRangeError):
            NumericRange(minimum=5, maximum=1)

    def test_bounds_must_be_finite(self):
        with pytest.raises(InvalidRangeError):
            NumericRange(minimum=0, maximum=float("inf"))

    def test_range_given_as_dict(self):
        with pytest.raises(InvalidRangeError):
            Parameter(
                aliases=["--x"], data_type="number", range={"minimum": 3, "maximum": 3}
            )

    def test_contains(self):
        bounds = NumericRange.parse("(0, 10]")
        assert 10 in bounds
        assert 0.0001 in bounds
        assert 0 not in bounds
        assert "5" not in bounds
        assert str(bounds) == "(0, 10]"


class TestAliases:
    def test_parse_alias(self):
        assert parse_alias("--name") == ("name", ArgumentKind.VARIABLE)
        assert parse_alias("-n") == ("n", ArgumentKind.FLAG)

    @pytest.mark.parametrize("alias", ["name", "--", "-", "-ab", "--na me", "--a=b"])
    def test_parse_alias_rejects(self, alias):
        with pytest.raises(InvalidParameterError):
            parse_alias(alias)


class TestFromSpec:
    def test_text_variable(self):
        parameter = Parameter.from_spec("--name")
        assert parameter.aliases == {"name": ArgumentKind.VARIABLE}
        assert parameter.data_type is DataType.TEXT
        assert parameter.default is None

    def test_typed_variable_with_default(self):
        parameter = Parameter.from_spec("--count=number,3", position=2)
        assert parameter.position == 2
        assert parameter.data_type is DataType.NUMBER
        assert parameter.default == "3"

    def test_empty_default(self):
        assert Parameter.from_spec("--note=text,").default == ""

    def test_flag(self):
        parameter = Parameter.from_spec("-v")
        assert parameter.aliases == {"v": ArgumentKind.FLAG}
        assert parameter.data_type is DataType.BOOLEAN
        assert parameter.default == "false"

    def test_flag_with_default(self):
        assert Parameter.from_spec("-v,true").default == "true"

    def test_flag_default_must_be_boolean_text(self):
        with pytest.raises(InvalidParameterError):
            Parameter.from_spec("-v,yes")

    def test_unknown_type(self):
        with pytest.raises(UnknownDataTypeError):
            Parameter.from_spec("--when=date")

    def test_bad_default(self):
        with pytest.raises(InvalidParameterError):
            Parameter.from_spec("--count=number,many")

    def test_missing_prefix(self):
        with pytest.raises(InvalidParameterError):
            Parameter.from_spec("name")


class TestValidation:
    def test_needs_an_alias(self):
        with pytest.raises(InvalidParameterError):
            Parameter(aliases=[])

    def test_duplicate_alias(self):
        with pytest.raises(InvalidParameterError):
            Parameter(aliases=["--name", "--name"])

    def test_range_only_for_numbers(self):
        with pytest.raises(InvalidRangeError):
            Parameter(aliases=["--x"], range="[0, 1]")

    def test_invalid_pattern(self):
        with pytest.raises(InvalidParameterError):
            Parameter(aliases=["--x"], pattern="(")

    def test_default_must_match_pattern(self):
        with pytest.raises(InvalidParameterError):
            Parameter(aliases=["--x"], pattern="^a", default="b")

    def test_negative_position(self):
        with pytest.raises(ValidationError):
            Parameter(aliases=["--x"], position=-1)


class TestSetters:
    def test_set_default(self):
        parameter = Parameter(aliases=["--x"], data_type="number")
        parameter.set_default("4")
        assert parameter.default == "4"
        with pytest.raises(InvalidParameterError):
            parameter.set_default("four")
        assert parameter.default == "4"

    def test_set_data_type_keeps_default_valid(self):
        parameter = Parameter(aliases=["--x"], default="abc")
        with pytest.raises(InvalidParameterError):
            parameter.set_data_type("number")
        assert parameter.data_type is DataType.TEXT
        parameter.set_data_type("string")
        assert parameter.data_type is DataType.TEXT

    def test_set_data_type_with_range(self):
        parameter = Parameter(aliases=["--x"], data_type="number", range="[0, 1]")
        with pytest.raises(InvalidRangeError):
            parameter.set_data_type("text")

    def test_set_range(self):
        parameter = Parameter(aliases=["--x"], data_type="number")
        parameter.set_range("[1, 2)")
        assert parameter.in_range("1")
        assert not parameter.in_range("2")
        parameter.set_range(None)
        assert parameter.in_range("99")

    def test_set_range_on_text(self):
        parameter = Parameter(aliases=["--x"])
        with pytest.raises(InvalidRangeError):
            parameter.set_range("[1, 2]")

    def test_set_pattern(self):
        parameter = Parameter(aliases=["--x"])
        parameter.set_pattern("^a")
        assert parameter.matches_pattern("abc")
        assert not parameter.matches_pattern("cba")
        with pytest.raises(InvalidParameterError):
            parameter.set_pattern("[")

    def test_add_alias(self):
        parameter = Parameter(aliases=["--verbose"], data_type="boolean")
        parameter.add_alias("v", "flag")
        assert parameter.names == ["verbose", "v"]
        assert parameter.format_alias("v") == "-v"
        with pytest.raises(InvalidParameterError):
            parameter.add_alias("v", ArgumentKind.FLAG)
        with pytest.raises(InvalidParameterError):
            parameter.add_alias("vv", ArgumentKind.FLAG)

    def test_sealed_parameter_rejects_changes(self):
        parameter = Parameter(aliases=["--x"])
        parameter.seal()
        with pytest.raises(SchemaSealedError):
            parameter.set_default("a")
        with pytest.raises(SchemaSealedError):
            parameter.add_alias("y", ArgumentKind.VARIABLE)


def test_to_definition_round_trip():
    parameter = Parameter(
        position=1,
        aliases=["--count", "-c"],
        data_type="number",
        range="(0, 5]",
        default="2",
        description="How many",
    )
    definition = parameter.to_definition()
    assert definition == {
        "position": 1,
        "aliases": ["--count", "-c"],
        "data_type": "number",
        "range": "(0, 5]",
        "pattern": None,
        "default": "2",
        "description": "How many",
    }
    assert Parameter.model_validate(definition).to_definition() == definition
