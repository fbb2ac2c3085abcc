import pytest

from address_parser.models import AddressEntry
from address_parser.parser import (
    UnknownStrategyError,
    available_strategies,
    get_strategy,
    inspect_addresses,
    parse_addresses,
)

ENCODED = "=?utf-8?B?0J3QsNC30LLQsNC90LjQtSDRgtC10YHRgtCw?="

MIXED_LIST = (
    "joe@example.com, <me@example.com>, Joe Doe <doe@example.com>,"
    " \"John O'Groats\" <johnog@example.net>,"
    " " + ENCODED + " <encoded@example.org>"
)


def _pairs(entries):
    return [(e.name, e.address) for e in entries]


@pytest.mark.parametrize("use_strict", [False, True])
@pytest.mark.parametrize(
    "text,expected",
    [
        ("joe@example.com", [("", "joe@example.com")]),
        ("Joe User <joe@example.com>", [("Joe User", "joe@example.com")]),
        (
            "Joe User <joe@example.com>, Jill User <jill@example.net>",
            [("Joe User", "joe@example.com"), ("Jill User", "jill@example.net")],
        ),
        (
            "Joe User <joe@example.com>,Jill User <jill@example.net>,frank@example.com,",
            [
                ("Joe User", "joe@example.com"),
                ("Jill User", "jill@example.net"),
                ("", "frank@example.com"),
            ],
        ),
        ("Jill User <doug@>", []),
        ("Joe User <{^c\\@**Dog^}@cartoon.com>", []),
        ("Joe User <joe@example.com.>, Jill User <jill.@example.net>", []),
        ("", []),
    ],
)
def test_parse_addresses(text, expected, use_strict):
    assert _pairs(parse_addresses(text, use_strict=use_strict)) == expected


@pytest.mark.parametrize("use_strict", [False, True])
def test_mixed_list_with_decoding(use_strict):
    result = parse_addresses(MIXED_LIST, use_strict=use_strict)
    assert _pairs(result) == [
        ("", "joe@example.com"),
        ("", "me@example.com"),
        ("Joe Doe", "doe@example.com"),
        ("John O'Groats", "johnog@example.net"),
        ("Название теста", "encoded@example.org"),
    ]


@pytest.mark.parametrize("use_strict", [False, True])
def test_mixed_list_without_decoder_keeps_encoded_name(use_strict):
    result = parse_addresses(MIXED_LIST, use_strict=use_strict, decoder=None)
    assert result[-1] == AddressEntry(name=ENCODED, address="encoded@example.org")
    assert len(result) == 5


def test_quotes_within_name_native():
    result = parse_addresses("Tim \"The Book\" O'Reilly <foo@example.com>")
    assert _pairs(result) == [("Tim \"The Book\" O'Reilly", "foo@example.com")]


def test_quotes_within_name_strict():
    result = parse_addresses("Tim \"The Book\" O'Reilly <foo@example.com>", use_strict=True)
    assert _pairs(result) == [("Tim The Book O'Reilly", "foo@example.com")]


@pytest.mark.parametrize("use_strict", [False, True])
def test_round_trip_simple_name(use_strict):
    first = parse_addresses("Joe User <joe@example.com>", use_strict=use_strict)[0]
    again = parse_addresses(
        "{} <{}>".format(first.name, first.address), use_strict=use_strict
    )
    assert again == [first]


@pytest.mark.parametrize("use_strict", [False, True])
def test_duplicates_are_kept_in_order(use_strict):
    result = parse_addresses("a@example.com, b@example.com, a@example.com", use_strict=use_strict)
    assert [e.address for e in result] == ["a@example.com", "b@example.com", "a@example.com"]


@pytest.mark.parametrize("value", [None, 42, b"joe@example.com", ["joe@example.com"]])
def test_non_string_input_fails_fast(value):
    with pytest.raises(TypeError):
        parse_addresses(value)


def test_entries_are_immutable():
    entry = parse_addresses("joe@example.com")[0]
    with pytest.raises(Exception):
        entry.address = "other@example.com"


def test_custom_decoder_is_applied_to_names_only():
    result = parse_addresses("Joe <joe@example.com>", decoder=str.upper)
    assert _pairs(result) == [("JOE", "joe@example.com")]


def test_decoder_not_called_for_empty_name():
    calls = []

    def decoder(name):
        calls.append(name)
        return name

    parse_addresses("joe@example.com", decoder=decoder)
    assert calls == []


def test_inspect_reports_invalid_candidates():
    candidates = inspect_addresses("Joe <joe@example.com>, Jill User <doug@>")
    assert [c.is_valid for c in candidates] == [True, False]
    assert candidates[1].name == "Jill User"
    assert candidates[1].address == "doug@"
    assert candidates[1].error


def test_inspect_strict_reports_syntax_errors():
    candidates = inspect_addresses("Jill User <jill.@example.net>, ok@example.com", use_strict=True)
    assert len(candidates) == 2
    assert not candidates[0].is_valid
    assert candidates[1].is_valid
    assert candidates[1].address == "ok@example.com"


def test_parse_matches_valid_inspect_results():
    text = "a@example.com, broken@, B <b@example.com>"
    valid = [c.to_entry() for c in inspect_addresses(text) if c.is_valid]
    assert parse_addresses(text) == valid


def test_validation_pattern_is_passed_through():
    text = "Jill <jill.@example.net>"
    assert parse_addresses(text) == []
    assert _pairs(parse_addresses(text, pattern="html5")) == [("Jill", "jill.@example.net")]


def test_unknown_pattern_raises():
    with pytest.raises(ValueError):
        parse_addresses("joe@example.com", pattern="nope")


def test_strategy_registry():
    assert available_strategies() == ["native", "strict"]
    assert get_strategy("native").name == "native"
    assert get_strategy("strict").name == "strict"


def test_unknown_strategy():
    with pytest.raises(UnknownStrategyError):
        get_strategy("imap4")


@pytest.mark.parametrize("use_strict", [False, True])
def test_mixed_raw_and_encoded_name(use_strict):
    result = parse_addresses("Renée =?utf-8?Q?Dupont?= <r@example.com>", use_strict=use_strict)
    assert _pairs(result) == [("Renée Dupont", "r@example.com")]


@pytest.mark.parametrize("use_strict", [False, True])
def test_broken_encoded_name_kept_verbatim(use_strict):
    result = parse_addresses("=?utf-8?B?!!!?= <a@example.com>", use_strict=use_strict)
    assert _pairs(result) == [("=?utf-8?B?!!!?=", "a@example.com")]


@pytest.mark.parametrize("use_strict", [False, True])
def test_leading_comment_becomes_name(use_strict):
    result = parse_addresses("(Joe) joe@example.com, (Jill) jill@example.net", use_strict=use_strict)
    assert _pairs(result) == [("Joe", "joe@example.com"), ("Jill", "jill@example.net")]


def test_leading_comment_in_group_member():
    result = parse_addresses("Team: (Joe) joe@example.com;", use_strict=True)
    assert _pairs(result) == [("Joe", "joe@example.com")]
