"""
Pytest configuration and shared fixtures for optjson tests.

Provides immutable test case data for well-formed documents, truncated and
malformed inputs, and inputs that must decode to nothing.
"""

from dataclasses import dataclass
from typing import Any

import pytest


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for one decoding scenario.

    ``absent`` marks inputs from which no value may be recovered.
    """

    description: str
    input_data: str
    expected_output: Any = None
    absent: bool = False


# https://json.org/JSON_checker/test/pass1.json
PASS1 = """[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}"
    }
]"""


@pytest.fixture
def well_formed_documents() -> list[JsonTestCase]:
    """
    Provides valid JSON documents that must decode exactly like json.loads.
    """
    return [
        JsonTestCase("pass1.json - complex nested structure", PASS1),
        JsonTestCase(
            "pass2.json - deep nesting",
            '[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
        ),
        JsonTestCase(
            "pass3.json - simple object",
            '{"JSON Test Pattern pass3": {"The outermost value": "must be '
            'an object or array.", "In this test": "It is an object."}}',
        ),
        JsonTestCase(
            "api response",
            '{"id": "msg_01", "type": "message", "content": [{"type": '
            '"text", "text": "Hello, world"}], "usage": {"input_tokens": '
            '12, "output_tokens": 5}, "stop_reason": null}',
        ),
        JsonTestCase(
            "unicode text",
            '{"greeting": "h\\u00e9llo", "emoji": "\\ud83d\\ude00", '
            '"raw": "日本語"}',
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides basic JSON value test cases for fundamental decoding.

    Covers all JSON primitive types and basic container structures.
    """
    return [
        JsonTestCase("null value", "null", None),
        JsonTestCase("true boolean", "true", True),
        JsonTestCase("false boolean", "false", False),
        JsonTestCase("integer", "42", 42),
        JsonTestCase("negative integer", "-17", -17),
        JsonTestCase("float", "3.14", 3.14),
        JsonTestCase("exponent", "1e3", 1000.0),
        JsonTestCase("empty string", '""', ""),
        JsonTestCase("simple string", '"hello"', "hello"),
        JsonTestCase("empty array", "[]", []),
        JsonTestCase("empty object", "{}", {}),
        JsonTestCase("simple array", "[1, 2, 3]", [1, 2, 3]),
        JsonTestCase("simple object", '{"key": "value"}', {"key": "value"}),
    ]


@pytest.fixture
def recovery_cases() -> list[JsonTestCase]:
    """
    Provides truncated and malformed inputs with the value to recover.
    """
    return [
        JsonTestCase(
            "missing end bracket",
            '["oops", "this", "is", "missing the end bracket',
            ["oops", "this", "is", "missing the end bracket"],
        ),
        JsonTestCase(
            "incomplete float",
            '{ "maybe_a_float": 12.}',
            {"maybe_a_float": 12.0},
        ),
        JsonTestCase(
            "unclosed outer array",
            '[1, 2, {"a": "apple"}',
            [1, 2, {"a": "apple"}],
        ),
        JsonTestCase(
            "unclosed string inside object",
            '[1, 2, {"a": "apple',
            [1, 2, {"a": "apple"}],
        ),
        JsonTestCase(
            "nested containers cut after a number",
            '{"coordinates":[{"x":1.0',
            {"coordinates": [{"x": 1.0}]},
        ),
        JsonTestCase("key without value", '{"a": 1, "b"', {"a": 1}),
        JsonTestCase("key before close", '{"a": 1, "b"}', {"a": 1}),
        JsonTestCase("dangling colon", '{"a": 1, "b":', {"a": 1}),
        JsonTestCase("trailing comma", "[1, 2,]", [1, 2]),
        JsonTestCase("double comma", "[1,, 2]", [1, 2]),
        JsonTestCase("missing commas", '["a" "b" 3]', ["a", "b", 3]),
        JsonTestCase("colon in array", '["a": 1]', ["a", 1]),
        JsonTestCase("mismatched closer", '["mismatch"}', ["mismatch"]),
        JsonTestCase("unquoted key skipped", '{key: 1, "b": 2}', {"b": 2}),
        JsonTestCase("numeric key skipped", '{1: 2, "b": 3}', {"b": 3}),
        JsonTestCase("missing colon drops pair", '{"a" 1}', {}),
        JsonTestCase("truncated exponent", "[1e, 2E-]", [1.0, 2.0]),
        JsonTestCase("truncated boolean", '{"ok": tr', {"ok": True}),
        JsonTestCase("truncated false", "[fal", [False]),
        JsonTestCase("malformed boolean", "[truex, fals]", [True]),
        JsonTestCase("misspelled boolean", "[truth, 1]", [1]),
        JsonTestCase("null quirk", "[nul, nope]", [None, None]),
        JsonTestCase("bare minus", "[-, 1]", [1]),
        JsonTestCase("second decimal point", "[1.2.3]", [1.2, 3]),
        JsonTestCase("stray characters", "[@1, #2]", [1, 2]),
        JsonTestCase(
            "duplicate keys",
            '{"a": 1, "b": 2, "a": 3}',
            {"a": 3, "b": 2},
        ),
        JsonTestCase(
            "trailing backslash",
            '["line\\',
            ["line\\"],
        ),
        JsonTestCase(
            "truncated unicode escape",
            '["caf\\u00',
            ["caf\\u00"],
        ),
        JsonTestCase("trailing data ignored", "[1] [2]", [1]),
    ]


@pytest.fixture
def absent_cases() -> list[JsonTestCase]:
    """
    Provides inputs from which no value can be decoded.
    """
    return [
        JsonTestCase("empty", "", absent=True),
        JsonTestCase("whitespace only", " \t\r\n", absent=True),
        JsonTestCase("plain words", "hello world", absent=True),
        JsonTestCase("closing bracket first", "]", absent=True),
        JsonTestCase("colon first", ": 1", absent=True),
        JsonTestCase("comma first", ", 1", absent=True),
        JsonTestCase("bare minus", "-", absent=True),
        JsonTestCase("malformed boolean", "tx", absent=True),
        JsonTestCase("single quotes", "'abc'", absent=True),
    ]
