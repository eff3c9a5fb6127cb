#!/usr/bin/env python3
"""
Test script for repair_json: valid documents pass through untouched and
broken ones come out as valid JSON.
"""

import json

import pytest

from jsonmend import JSONRepair, repair_json

VALID_DOCUMENTS = [
    '{"a":2.3e100,"b":"str","c":null,"d":false,"e":[1,2,3]}',
    "  { \n } \t ",
    "{}",
    '{"a": {}}',
    '{"a": "b"}',
    '{"a": 2}',
    "[]",
    "[{}]",
    '{"a":[]}',
    '[1, "hi", true, false, null, {}, []]',
    "23",
    "0",
    "0e+2",
    "0.0",
    "-0",
    "2.3",
    "2300e3",
    "2300e+3",
    "2300e-3",
    "-2",
    "2e-3",
    "2.3e-3",
    '"str"',
    '"\\"\\\\\\/\\b\\f\\n\\r\\t"',
    '"\\u260E"',
    "true",
    "false",
    "null",
    '""',
    '"["',
    '"]"',
    '"{"',
    '"}"',
    '":"',
    '","',
    '"\u2605"',
    '"\\u2605"',
    '"\U0001f600"',
    '"\\ud83d\\ude00"',
    '"\u0439\u043d\u0444\u043e\u0440\u043c\u0430\u0446\u0438\u044f"',
    '{"\u2605":true}',
    '{"\\u2605":true}',
    '{"\U0001f600":true}',
    '{"\\ud83d\\ude00":true}',
    "[\n{},\n{}\n]",
    '{\n  "nested": {\n    "list": [1, 2.5, -3e2],\n    "flag": false\n  }\n}',
]


@pytest.mark.parametrize("document", VALID_DOCUMENTS)
def test_valid_json_is_unchanged(document):
    """Repairing valid JSON returns it byte for byte."""
    json.loads(document)
    assert repair_json(document) == document
    assert repair_json(document, strict=True) == document


REPAIRS = [
    # missing quotes
    ("abc", '"abc"'),
    ("hello   world", '"hello   world"'),
    ("{a:2}", '{"a":2}'),
    ("{a: 2}", '{"a": 2}'),
    ("{2: 2}", '{"2": 2}'),
    ("{true: 2}", '{"true": 2}'),
    ("{\n  a: 2\n}", '{\n  "a": 2\n}'),
    ("[a,b]", '["a","b"]'),
    ("[\na,\nb\n]", '[\n"a",\n"b"\n]'),
    # missing end quote
    ('"abc', '"abc"'),
    ("'abc", '"abc"'),
    ("\u2018abc", '"abc"'),
    # single and special quotes
    ("{'a':2}", '{"a":2}'),
    ("{'a':'foo'}", '{"a":"foo"}'),
    ("{\"a\":'foo'}", '{"a":"foo"}'),
    ("{a:'foo',b:'bar'}", '{"a":"foo","b":"bar"}'),
    ("{\u201ca\u201d:\u201cb\u201d}", '{"a":"b"}'),
    ("{\u2018a\u2019:\u2018b\u2019}", '{"a":"b"}'),
    ("{\u0060a\u00b4:\u0060b\u00b4}", '{"a":"b"}'),
    ("\u2018foo\u2019", '"foo"'),
    ("\u201cfoo\u201d", '"foo"'),
    ("\u0060foo\u00b4", '"foo"'),
    ("\u0060foo'", '"foo"'),
    # special quotes inside a normal string are content
    ('"Rounded \u201c quote"', '"Rounded \u201c quote"'),
    ('"{a:b}"', '"{a:b}"'),
    # escape characters
    ('"foo\'bar"', '"foo\'bar"'),
    ('"foo\\"bar"', '"foo\\"bar"'),
    ("'foo\"bar'", '"foo\\"bar"'),
    ("'foo\\'bar'", '"foo\'bar"'),
    ('"foo\\\'bar"', '"foo\'bar"'),
    ('"\\a"', '"a"'),
    # missing object value
    ('{"a":}', '{"a":null}'),
    ('{"a":,"b":2}', '{"a":null,"b":2}'),
    ('{"a":', '{"a":null}'),
    # undefined
    ('{"a":undefined}', '{"a":null}'),
    ("[undefined]", "[null]"),
    ("undefined", "null"),
    # control characters
    ('"hello\\bworld"', '"hello\\bworld"'),
    ('"hello\\nworld"', '"hello\\nworld"'),
    ('{"value\\n": "dc=hcm,dc=com"}', '{"value\\n": "dc=hcm,dc=com"}'),
    ('"hello\nworld"', '"hello\\nworld"'),
    ('"a\tb\rc\bd\fe"', '"a\\tb\\rc\\bd\\fe"'),
    # special whitespace
    ('{"a":\u00a0"foo\u00a0bar"}', '{"a": "foo\u00a0bar"}'),
    ('{"a":\u202f"foo"}', '{"a": "foo"}'),
    ('{"a":\u205f"foo"}', '{"a": "foo"}'),
    ('{"a":\u3000"foo"}', '{"a": "foo"}'),
    ('{"a":\u2009"foo"}', '{"a": "foo"}'),
    # block comments
    ("/* foo */ {}", " {}"),
    ("{} /* foo */ ", "{}  "),
    ("{} /* foo ", "{} "),
    ("\n/* foo */\n{}", "\n\n{}"),
    ('{"a":"foo",/*hello*/"b":"bar"}', '{"a":"foo","b":"bar"}'),
    ("/* a *//* b */[]", "[]"),
    # line comments
    ("{} // comment", "{} "),
    ('{\n"a":"foo",//hello\n"b":"bar"\n}', '{\n"a":"foo",\n"b":"bar"\n}'),
    # comments inside strings are content
    ('"/* foo */"', '"/* foo */"'),
    ('"// foo"', '"// foo"'),
    # JSONP and function calls
    ("callback_123({});", "{}"),
    ("callback_123([]);", "[]"),
    ("callback_123(2);", "2"),
    ('callback_123("foo");', '"foo"'),
    ("callback_123(null);", "null"),
    ("callback_123(true);", "true"),
    ("callback_123(false);", "false"),
    ("callback({}", "{}"),
    ("/* foo bar */ callback_123 ({})", " {}"),
    ("/* foo bar */ callback_123 (  {}  )", "   {}  "),
    ("  /* foo bar */   callback_123({});  ", "     {}  "),
    ("\n/* foo\nbar */\ncallback_123 ({});\n\n", "\n\n{}\n\n"),
    # escaped string contents
    ('\\"hello world\\"', '"hello world"'),
    ('\\"hello world\\', '"hello world"'),
    ('\\"hello \\\\"world\\\\"\\"', '"hello \\"world\\""'),
    ('[\\"hello \\\\"world\\\\"\\"]', '["hello \\"world\\""]'),
    ('{\\"stringified\\": \\"hello \\\\"world\\\\"\\"}', '{"stringified": "hello \\"world\\""}'),
    ('\\"hello"', '"hello"'),
    # trailing commas in arrays
    ("[1,2,3,]", "[1,2,3]"),
    ("[1,2,3,\n]", "[1,2,3\n]"),
    ("[1,2,3,  \n  ]", "[1,2,3  \n  ]"),
    ('{"array":[1,2,3,]}', '{"array":[1,2,3]}'),
    ('"[1,2,3,]"', '"[1,2,3,]"'),
    # trailing commas in objects
    ('{"a":2,}', '{"a":2}'),
    ('{"a":2  ,  }', '{"a":2    }'),
    ('{"a":2  , \n }', '{"a":2   \n }'),
    ('{"a":2/*foo*/,/*foo*/}', '{"a":2}'),
    ('"{a:2,}"', '"{a:2,}"'),
    # trailing comma at the root
    ("4,", "4"),
    ("4 ,", "4 "),
    ("4 , ", "4  "),
    ('{"a":2},', '{"a":2}'),
    ("[1,2,3],", "[1,2,3]"),
    # missing closing brace
    ("{", "{}"),
    ('{"a":2', '{"a":2}'),
    ('{"a":2,', '{"a":2}'),
    ('{"a":{"b":2}', '{"a":{"b":2}}'),
    ('{\n  "a":{"b":2\n}', '{\n  "a":{"b":2\n}}'),
    ('[{"b":2]', '[{"b":2}]'),
    ('[{"b":2\n]', '[{"b":2}\n]'),
    ('[{"i":1{"i":2}]', '[{"i":1},{"i":2}]'),
    ('[{"i":1,{"i":2}]', '[{"i":1},{"i":2}]'),
    # missing closing bracket
    ("[", "[]"),
    ("[1,2,3", "[1,2,3]"),
    ("[1,2,3,", "[1,2,3]"),
    ("[[1,2,3,", "[[1,2,3]]"),
    ('{\n"values":[1,2,3\n}', '{\n"values":[1,2,3]\n}'),
    ('{\n"values":[1,2,3\n', '{\n"values":[1,2,3]}\n'),
    # Python constants
    ("True", "true"),
    ("False", "false"),
    ("None", "null"),
    ('{"a": True, "b": [False, None]}', '{"a": true, "b": [false, null]}'),
    # unknown symbols become strings
    ("foo", '"foo"'),
    ("[1,foo,4]", '[1,"foo",4]'),
    ("{foo: bar}", '{"foo": "bar"}'),
    ("foo 2 bar", '"foo 2 bar"'),
    ("{greeting: hello world}", '{"greeting": "hello world"}'),
    ('{greeting: hello world\nnext: "line"}', '{"greeting": "hello world",\n"next": "line"}'),
    ("{greeting: hello world!}", '{"greeting": "hello world!"}'),
    # string concatenation
    ('"hello" + " world"', '"hello world"'),
    ('"hello" +\n " world"', '"hello world"'),
    ('"a"+"b"+"c"', '"abc"'),
    ('"hello" + /*comment*/ " world"', '"hello world"'),
    ("{\n  \"greeting\": 'hello' +\n 'world'\n}", '{\n  "greeting": "helloworld"\n}'),
    # missing commas
    ('{"array": [{}{}]}', '{"array": [{},{}]}'),
    ('{"array": [{} {}]}', '{"array": [{}, {}]}'),
    ('{"array": [{}\n{}]}', '{"array": [{},\n{}]}'),
    ('{"array": [\n{}\n{}\n]}', '{"array": [\n{},\n{}\n]}'),
    ('{"array": [\n1\n2\n]}', '{"array": [\n1,\n2\n]}'),
    ('{"array": [\n"a"\n"b"\n]}', '{"array": [\n"a",\n"b"\n]}'),
    ('{"a":1 "b":2}', '{"a":1, "b":2}'),
    # missing colon
    ('{"a" 1}', '{"a": 1}'),
    ('{"a" "b"}', '{"a": "b"}'),
    # truncated numbers
    ("-", "-0"),
    ("2.", "2.0"),
    ("2e", "2e0"),
    ("2e-", "2e-0"),
    ("2E+", "2E+0"),
    ("[1,2.", "[1,2.0]"),
    ('{"a":-', '{"a":-0}'),
]


@pytest.mark.parametrize("text, expected", REPAIRS)
def test_repair(text, expected):
    result = repair_json(text)
    assert result == expected
    json.loads(result)


def test_mongodb_data_types():
    document = (
        "{\n"
        '   "_id" : ObjectId("123"),\n'
        '   "isoDate" : ISODate("2012-12-19T06:01:17.171Z"),\n'
        '   "regularNumber" : 67,\n'
        '   "long" : NumberLong("2"),\n'
        '   "long2" : NumberLong(2),\n'
        '   "int" : NumberInt("3"),\n'
        '   "int2" : NumberInt(3),\n'
        '   "decimal" : NumberDecimal("4"),\n'
        '   "decimal2" : NumberDecimal(4)\n'
        "}"
    )
    expected = (
        "{\n"
        '   "_id" : "123",\n'
        '   "isoDate" : "2012-12-19T06:01:17.171Z",\n'
        '   "regularNumber" : 67,\n'
        '   "long" : "2",\n'
        '   "long2" : 2,\n'
        '   "int" : "3",\n'
        '   "int2" : 3,\n'
        '   "decimal" : "4",\n'
        '   "decimal2" : 4\n'
        "}"
    )
    assert repair_json(document) == expected


def test_newline_delimited_json():
    assert repair_json("{}\n{}") == "[{},{}]"
    assert repair_json('{"a":1}\n{"b":2}\n') == '[{"a":1},{"b":2}]'
    assert repair_json('{"a":1}\n\n{"b":2}\n{"c":3}') == '[{"a":1},{"b":2},{"c":3}]'
    assert repair_json('{"a":1},\n{"b":2},\n') == '[{"a":1},{"b":2}]'
    assert repair_json("1\n2\n3") == "[1,2,3]"
    assert repair_json("1,2,3") == "[1,2,3]"


def test_newline_delimited_json_with_comments():
    text = '{"a":1}\n// second record\n{"b":2}'
    assert repair_json(text) == '[{"a":1},{"b":2}]'


def test_newline_delimited_json_repairs_each_record():
    text = "{a:1}\n{b:'x'}\n[1,2,"
    assert repair_json(text) == '[{"a":1},{"b":"x"},[1,2]]'
    assert json.loads(repair_json(text)) == [{"a": 1}, {"b": "x"}, [1, 2]]


def test_unquoted_symbol_is_escaped():
    assert repair_json("[a\\b]") == '["a\\\\b"]'
    assert repair_json("[a\tb]") == '["a\\tb"]'
    json.loads(repair_json("[a\\b]"))


def test_leading_backslash_without_quote_is_kept():
    assert repair_json("[\\abc]") == '["\\\\abc"]'


def test_concatenation_without_second_string():
    assert repair_json('["a" + 1]') == '["a",1]'


def test_numbers_need_an_integer_part():
    assert repair_json("[.5]") == '[".5"]'
    assert repair_json("[elephant]") == '["elephant"]'
    assert repair_json("{e: 1}") == '{"e": 1}'


def test_repair_stream():
    repairer = JSONRepair()
    chunks = ["{name: ", "'John'", ", age: 3", "0"]
    assert repairer.repair_stream(chunks) == '{"name": "John", "age": 30}'
    assert repairer.repair_stream(iter(["[1,", "2"])) == "[1,2]"


def test_repair_rejects_non_string():
    with pytest.raises(TypeError):
        repair_json(b"{}")
    with pytest.raises(TypeError):
        repair_json(None)


def test_repairs_are_independent():
    repairer = JSONRepair()
    assert repairer.repair("[1,2") == "[1,2]"
    assert repairer.repair("{a:1") == '{"a":1}'
