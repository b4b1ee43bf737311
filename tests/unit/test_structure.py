import pytest

import json_lint as jl


def test_extra_data_reports_offset():
    res = jl.validate("[1] 2")
    assert not res.valid
    assert res.error_offset == 4
    assert res.reason == "extra data after root value"


def test_scalar_root_is_allowed():
    assert jl.validate("true").valid
    assert jl.validate("  null  ").valid


def test_empty_containers():
    assert jl.validate("{}").valid
    assert jl.validate("[]").valid
    assert jl.validate("{ \t\r\n }").valid
    assert jl.validate("[ ]").valid


def test_whitespace_around_members():
    assert jl.validate('{ "a" : 1 , "b" : [ 1 , 2 ] }').valid
    assert jl.validate('\n[\n\t1,\n\t2\n]\n').valid


def test_duplicate_keys_are_grammatical():
    assert jl.validate('{"a":1,"a":2}').valid


def test_missing_comma_in_object():
    res = jl.validate('{"a":1 "b":2}')
    assert res == jl.ValidationResult(False, 7, "expected ',' or '}'")


def test_missing_colon():
    res = jl.validate('{"zero"}')
    assert res == jl.ValidationResult(False, 7, "expected ':'")


def test_non_string_key():
    for bad in ('{1:"one"}', '{null:[]}', '{[false]:"false"}', '{{}:"object"}'):
        res = jl.validate(bad)
        assert res.error_offset == 1, bad
        assert res.reason == "expected string key"


def test_bad_escape_in_key_reported_by_string_matcher():
    res = jl.validate('{"a\\x":1}')
    assert res.error_offset == 4
    assert res.reason.startswith("invalid escape")


def test_missing_closing_bracket_in_array():
    res = jl.validate("[1, 2")
    assert res == jl.ValidationResult(False, 5, "expected ',' or ']'")


def test_missing_closing_brace():
    res = jl.validate('{"a":1')
    assert res.error_offset == 6


def test_trailing_comma_rejected():
    assert jl.validate("[1,]") == jl.ValidationResult(False, 3, "expected a value")
    assert jl.validate('{"a":1,}') == jl.ValidationResult(False, 7, "expected string key")


def test_empty_slots_rejected():
    assert jl.validate("[,,,]").error_offset == 1


def test_colon_in_array():
    assert jl.validate("[1:2]").error_offset == 2


def test_mismatched_brackets():
    assert jl.validate("[{]}").error_offset == 2
    assert jl.validate('{"a":[}').error_offset == 6


def test_unknown_barewords():
    for bad in ("[document.cookies]", "[alert()]", "[True]", "[nul]"):
        assert jl.validate(bad).error_offset == 1, bad


def test_literal_followed_by_garbage():
    assert jl.validate("[truex]").error_offset == 5


def test_inner_error_offset_wins():
    # The escape error deep inside must not be replaced by an outer offset.
    res = jl.validate('{"a":[1,{"b":"\\z"}]}')
    assert res.error_offset == 15
    assert res.reason == "invalid escape \\z"


def test_wikipedia_example():
    assert jl.validate("""
{
     "firstName": "John",
     "lastName": "Smith",
     "address": {
         "streetAddress": "21 2nd Street",
         "city": "New York",
         "state": "NY",
         "postalCode": 10021
     },
     "phoneNumbers": [
         { "type": "home", "number": "212 555-1234" },
         { "type": "fax", "number": "646 555-4567" }
     ],
     "newSubscription": false,
     "companyName": null
 }
""").valid


@pytest.mark.parametrize("text", ['"x"', "1.5", "[]", '{"k":[null]}', "false"])
def test_nesting_symmetry(text):
    assert jl.validate("[" + text + "]").valid == jl.validate(text).valid


@pytest.mark.parametrize("text", ["[1,]", "01", '"\\q"', "tru"])
def test_nesting_symmetry_invalid(text):
    assert not jl.validate(text).valid
    assert not jl.validate("[" + text + "]").valid
