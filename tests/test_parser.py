import pytest

from switchkit.errors import ParseError
from switchkit.option import Option, OptionType
from switchkit.parser import Parser, Values


def parse(options: list[Option], args: list[str], skipLeading: bool = True):
    return Parser(options).parse(args, skipLeading)


VERBOSE = Option("verbose", aliases=("-v",))
LEVEL = Option("level", OptionType.NUMERIC, aliases=("-l",))

# --- Basics ----------------------------------------------------------------- #


def test_empty_args_yield_defaults():
    res = parse([Option("jobs", OptionType.NUMERIC, 4), VERBOSE], [], False)
    assert res.values == {"jobs": 4}
    assert res.leading == ()
    assert res.trailing == ()


def test_short_and_long_are_equivalent():
    assert parse([VERBOSE], ["-v"]).values == parse([VERBOSE], ["--verbose"]).values
    assert parse([VERBOSE], ["-v"]).values == {"verbose": True}


def test_derived_short():
    assert parse([Option("force")], ["-f"]).values == {"force": True}


def test_args_are_not_mutated():
    args = ["-v", "rest"]
    parse([VERBOSE], args)
    assert args == ["-v", "rest"]


def test_parser_reusable():
    parser = Parser([VERBOSE, LEVEL])
    assert parser.parse(["-l", "1"]).values == {"level": 1}
    assert parser.parse(["-v"]).values == {"verbose": True}


def test_defaults_are_not_shared():
    parser = Parser([Option("tags", OptionType.ARRAY, ["a"])])
    first = parser.parse([])
    first.values["tags"].append("b")
    assert parser.parse([]).values["tags"] == ["a"]


# --- Booleans --------------------------------------------------------------- #


def test_auto_negation():
    res = parse([Option("verbose", OptionType.BOOLEAN, True)], ["--no-verbose"])
    assert res.values == {"verbose": False}


def test_auto_negation_with_hyphen():
    assert parse([Option("dry-run")], ["--no-dry-run"]).values == {"dry-run": False}


def test_explicit_negation_descriptor_wins():
    options = [Option("force"), Option("no-force", aliases=("-n",))]
    assert parse(options, ["--no-force"]).values == {"no-force": True}


def test_boolean_never_consumes():
    res = parse([VERBOSE], ["-v", "file"])
    assert res.values == {"verbose": True}
    assert res.trailing == ("file",)


def test_squashed_cluster():
    options = [
        Option("a", aliases=("-a",)),
        Option("b", aliases=("-b",)),
        Option("c", aliases=("-c",)),
    ]
    res = parse(options, ["-abc"])
    assert res.values == {"a": True, "b": True, "c": True}


def test_squashed_cluster_with_derived_shorts():
    options = [Option("all"), Option("brief")]
    assert parse(options, ["-ab"]).values == {"all": True, "brief": True}


def test_squashed_cluster_with_value_switch_is_positional():
    options = [Option("a", aliases=("-a",)), Option("name", OptionType.STRING)]
    res = parse(options, ["-an"], False)
    assert res.values == {}
    assert res.trailing == ("-an",)


# --- Values ----------------------------------------------------------------- #


def test_string():
    options = [Option("name", OptionType.STRING)]
    assert parse(options, ["--name", "x"]).values == {"name": "x"}
    assert parse(options, ["--name=x"]).values == {"name": "x"}
    assert parse(options, ["-n", "x"]).values == {"name": "x"}
    assert parse(options, ["-n=x"]).values == {"name": "x"}


def test_string_accepts_unknown_dash_token():
    options = [Option("name", OptionType.STRING)]
    assert parse(options, ["--name", "-x"]).values == {"name": "-x"}


def test_numeric_inline_short():
    res = parse([LEVEL], ["-l3.5"])
    assert res.values == {"level": 3.5}
    assert isinstance(res.values["level"], float)


def test_numeric_int():
    res = parse([LEVEL], ["--level", "3"])
    assert res.values == {"level": 3}
    assert isinstance(res.values["level"], int)


def test_numeric_malformed():
    with pytest.raises(ParseError):
        parse([LEVEL], ["-l3.5.1"])
    with pytest.raises(ParseError):
        parse([LEVEL], ["--level", "high"])


def test_hash():
    res = parse([Option("opts", OptionType.HASH)], ["--opts", "a:1 b:2"])
    assert res.values == {"opts": {"a": "1", "b": "2"}}


def test_array():
    res = parse([Option("list", OptionType.ARRAY)], ["--list", "[a, b, c]"])
    assert res.values == {"list": ["a", "b", "c"]}


def test_default_type_consumes_value():
    options = [Option("out", OptionType.DEFAULT)]
    assert parse(options, ["--out", "file"]).values == {"out": "file"}


def test_default_type_presence():
    options = [Option("out", OptionType.DEFAULT), VERBOSE]
    assert parse(options, ["--out"]).values == {"out": True}
    assert parse(options, ["--out", "-v"]).values == {"out": True, "verbose": True}


def test_default_type_does_not_consume_dash_token():
    res = parse([Option("out", OptionType.DEFAULT)], ["--out", "-z"])
    assert res.values == {"out": True}
    assert res.trailing == ("-z",)


def test_last_occurrence_wins():
    assert parse([LEVEL], ["-l", "1", "-l", "2"]).values == {"level": 2}


# --- Errors ----------------------------------------------------------------- #


def test_missing_value():
    with pytest.raises(ParseError) as e:
        parse([Option("name", OptionType.STRING)], ["--name"])
    assert str(e.value) == "no value provided for argument '--name'"


def test_missing_value_reports_long_form():
    with pytest.raises(ParseError) as e:
        parse([LEVEL], ["-l"])
    assert str(e.value) == "no value provided for argument '--level'"


def test_switch_as_value():
    with pytest.raises(ParseError) as e:
        parse([Option("name", OptionType.STRING), VERBOSE], ["--name", "-v"])
    assert str(e.value) == "cannot pass switch '-v' as an argument"


def test_required():
    options = [Option("name", OptionType.STRING, required=True)]
    with pytest.raises(ParseError) as e:
        parse(options, [])
    assert str(e.value) == "no value provided for required argument '--name'"
    assert parse(options, ["--name", "x"]).values == {"name": "x"}


def test_required_satisfied_by_default():
    options = [Option("name", OptionType.STRING, "app", required=True)]
    assert parse(options, []).values == {"name": "app"}


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse([LEVEL], ["-l", "x"])


# --- Positionals ------------------------------------------------------------ #


def test_leading_and_trailing():
    res = parse([Option("flag")], ["foo", "--flag", "bar"], True)
    assert res.leading == ("foo",)
    assert res.values == {"flag": True}
    assert res.trailing == ("bar",)
    assert res.positionals == ["foo", "bar"]


def test_no_leading_scan():
    res = parse([Option("flag")], ["foo", "--flag", "bar"], False)
    assert res.leading == ()
    assert res.values == {}
    assert res.trailing == ("foo", "--flag", "bar")


def test_only_positionals():
    res = parse([Option("flag")], ["foo", "bar"])
    assert res.leading == ("foo", "bar")
    assert res.trailing == ()


def test_unknown_switch_stops_parsing():
    res = parse([VERBOSE], ["-v", "--other", "-v"])
    assert res.values == {"verbose": True}
    assert res.trailing == ("--other", "-v")


def test_boolean_inline_value_left_as_positional():
    res = parse([VERBOSE], ["-v3"])
    assert res.values == {"verbose": True}
    assert res.trailing == ("3",)


# --- Values mapping --------------------------------------------------------- #


def test_values_indifferent_access():
    values = Values({"dry-run": True, "level": 2})
    assert values["dry-run"] is True
    assert values["dry_run"] is True
    assert values.dry_run is True
    assert values.level == 2
    assert "dry_run" in values
    assert values.get("missing") is None


def test_values_missing_attribute():
    with pytest.raises(AttributeError):
        Values({}).missing


def test_values_read_only():
    with pytest.raises(TypeError):
        Values({"a": 1})["a"] = 2  # type: ignore


def test_single_letter_name_has_no_short():
    res = parse([Option("a")], ["-a"], False)
    assert res.values == {}
    assert res.trailing == ("-a",)
    assert parse([Option("a")], ["--a"]).values == {"a": True}


def test_auto_negation_through_long_alias():
    options = [Option("trace", OptionType.BOOLEAN, True, aliases=("--debug",))]
    res = parse(options, ["--no-debug"])
    assert res.values == {"trace": False}
    assert res.leading == ()


def test_values_named_like_mapping_methods():
    res = parse([Option("items", OptionType.STRING)], ["--items", "x"])
    assert res.values["items"] == "x"
    assert callable(res.values.items)
