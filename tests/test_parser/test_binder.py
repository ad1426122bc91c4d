import pytest

from flagline.command import CommandSchema
from flagline.exceptions import (
    AmbiguousArgumentError,
    ConversionError,
    FormatMismatchError,
    MissingDefaultError,
    RangeMismatchError,
    TypeMismatchError,
)
from flagline.parser.arguments import build
from flagline.parser.binder import bind, bind_parameter
from flagline.parser.parser_types import ArgumentKind
from flagline.parser.scanner import scan


def bind_text(command: CommandSchema, text: str) -> list:
    return bind(command, build(scan(text)))


@pytest.fixture
def greet():
    return CommandSchema(name="greet", parameters=["--name", "-v"])


def test_quoted_value_and_flag(greet):
    assert bind_text(greet, 'greet --name="Ada Lovelace" -v') == ["Ada Lovelace", True]


def test_flag_default_is_false(greet):
    assert bind_text(greet, "greet --name=Ada") == ["Ada", False]


def test_vector_follows_position_not_input_order(greet):
    assert bind_text(greet, "greet -v --name=Ada") == ["Ada", True]


def test_zero_parameter_command():
    command = CommandSchema(name="status")
    assert bind_text(command, "status") == []


def test_unknown_arguments_are_ignored(greet):
    assert bind_text(greet, "greet --name=Ada -q --other=1") == ["Ada", False]


def test_missing_value_without_default(greet):
    with pytest.raises(MissingDefaultError) as exc_info:
        bind_text(greet, "greet -v")
    assert exc_info.value.alias == "--name"


def test_bare_variable_uses_default():
    command = CommandSchema(name="cmd", parameters=["--count=number,5"])
    assert bind_text(command, "cmd --count") == [5]
    assert bind_text(command, "cmd") == [5]


def test_bare_variable_without_default():
    command = CommandSchema(name="cmd", parameters=["--count=number"])
    with pytest.raises(MissingDefaultError) as exc_info:
        bind_text(command, "cmd --count")
    assert exc_info.value.alias == "--count"


def test_ambiguous_aliases():
    command = CommandSchema(
        name="cmd", parameters=[{"aliases": ["--name", "-n"], "default": "x"}]
    )
    with pytest.raises(AmbiguousArgumentError) as exc_info:
        bind_text(command, "cmd --name=a -n=b")
    assert exc_info.value.first_alias == "--name"
    assert exc_info.value.second_alias == "-n"


def test_flag_alias_with_value_is_type_mismatch():
    command = CommandSchema(name="cmd", parameters=["-v"])
    with pytest.raises(TypeMismatchError) as exc_info:
        bind_text(command, "cmd -v=true")
    assert exc_info.value.expected is ArgumentKind.FLAG
    assert exc_info.value.actual is ArgumentKind.VARIABLE


def test_type_mismatch_flag_for_variable():
    command = CommandSchema(name="cmd", parameters=["--n"])
    with pytest.raises(TypeMismatchError) as exc_info:
        bind_text(command, "cmd -n")
    assert exc_info.value.alias == "--n"
    assert exc_info.value.expected is ArgumentKind.VARIABLE
    assert exc_info.value.actual is ArgumentKind.FLAG


def test_type_mismatch_variable_for_flag():
    command = CommandSchema(name="cmd", parameters=["-v"])
    with pytest.raises(TypeMismatchError) as exc_info:
        bind_text(command, "cmd --v=true")
    assert exc_info.value.alias == "-v"
    assert exc_info.value.expected is ArgumentKind.FLAG


def test_flag_alias_of_text_parameter_gets_true_text():
    command = CommandSchema(
        name="cmd",
        parameters=[{"aliases": {"mode": "variable", "m": "flag"}, "default": "off"}],
    )
    assert bind_text(command, "cmd -m") == ["true"]
    assert bind_text(command, "cmd --mode=fast") == ["fast"]
    assert bind_text(command, "cmd") == ["off"]


def test_pattern_mismatch():
    command = CommandSchema(
        name="cmd", parameters=[{"aliases": ["--id"], "pattern": r"^[a-z]+\d$"}]
    )
    assert bind_text(command, "cmd --id=abc1") == ["abc1"]
    with pytest.raises(FormatMismatchError) as exc_info:
        bind_text(command, "cmd --id=ABC")
    assert exc_info.value.value == "ABC"
    assert exc_info.value.pattern == r"^[a-z]+\d$"


def test_pattern_is_searched():
    command = CommandSchema(
        name="cmd", parameters=[{"aliases": ["--id"], "pattern": r"\d"}]
    )
    assert bind_text(command, "cmd --id=a1b") == ["a1b"]


@pytest.mark.parametrize(
    "bounds, value, accepted",
    [
        ("(0, 10)", "10", False),
        ("(0, 10)", "9.999999", True),
        ("(0, 10)", "0", False),
        ("[0, 10]", "0", True),
        ("[0, 10]", "10", True),
        ("[0, 10)", "10", False),
        ("(0, 10]", "10", True),
        ("[0, 10]", "-0.5", False),
    ],
)
def test_range_boundaries(bounds, value, accepted):
    command = CommandSchema(
        name="cmd",
        parameters=[{"aliases": ["--x"], "data_type": "number", "range": bounds}],
    )
    if accepted:
        assert bind_text(command, f"cmd --x={value}") == [float(value)]
    else:
        with pytest.raises(RangeMismatchError) as exc_info:
            bind_text(command, f"cmd --x={value}")
        assert exc_info.value.value == value
        assert str(exc_info.value.bounds) == bounds


def test_range_on_non_number_value_is_conversion_error():
    command = CommandSchema(
        name="cmd",
        parameters=[{"aliases": ["--x"], "data_type": "number", "range": "[0, 1]"}],
    )
    with pytest.raises(ConversionError):
        bind_text(command, "cmd --x=abc")


@pytest.mark.parametrize(
    "data_type, raw, expected",
    [
        ("boolean", "true", True),
        ("boolean", "TRUE", False),
        ("boolean", "yes", False),
        ("text", "a b", "a b"),
        ("number", "42", 42),
        ("number", "-1.5", -1.5),
        ("structured", "[1,2]", [1, 2]),
        ("structured", '{"a":1}', {"a": 1}),
        ("absent", "anything", None),
    ],
)
def test_conversion_table(data_type, raw, expected):
    command = CommandSchema(
        name="cmd", parameters=[{"aliases": ["--x"], "data_type": data_type}]
    )
    assert bind_text(command, f"cmd --x='{raw}'") == [expected]


@pytest.mark.parametrize(
    "data_type, raw", [("number", "12abc"), ("number", "nan"), ("structured", "[1,")]
)
def test_conversion_errors(data_type, raw):
    command = CommandSchema(
        name="cmd", parameters=[{"aliases": ["--x"], "data_type": data_type}]
    )
    with pytest.raises(ConversionError) as exc_info:
        bind_text(command, f"cmd --x={raw}")
    assert exc_info.value.value == raw


def test_absent_parameter_without_default_binds_none():
    command = CommandSchema(
        name="cmd", parameters=[{"aliases": ["--x"], "data_type": "absent"}]
    )
    assert bind_text(command, "cmd") == [None]


def test_first_failing_parameter_wins():
    command = CommandSchema(name="cmd", parameters=["--a=number", "--b=number"])
    with pytest.raises(ConversionError):
        bind_text(command, "cmd --a=x")
    with pytest.raises(MissingDefaultError) as exc_info:
        bind_text(command, "cmd --a=1")
    assert exc_info.value.alias == "--b"


def test_bind_seals_command(greet):
    assert not greet.sealed
    bind_text(greet, "greet --name=Ada")
    assert greet.sealed


def test_bind_parameter_directly(greet):
    argument_set = build(scan("greet --name=Ada"))
    assert bind_parameter(greet.parameters[0], argument_set) == "Ada"
    assert bind_parameter(greet.parameters[1], argument_set) is False


def test_repeated_binding_is_idempotent(greet):
    argument_set = build(scan('greet --name="Ada" -v'))
    assert bind(greet, argument_set) == bind(greet, argument_set)


def test_oversized_integer_in_range_check_is_conversion_error():
    command = CommandSchema(
        name="cmd",
        parameters=[{"aliases": ["--x"], "data_type": "number", "range": "[0, 10]"}],
    )
    with pytest.raises(ConversionError):
        bind_text(command, "cmd --x=" + "1" * 5000)
