"""
Example script exercising the string subsystem end to end.

Covers escape decoding (\\x, \\u, \\U), concatenation with a string and
with an integer, comparison, length, and indexed replacement.
"""
from scriptstr.model import Script
from scriptstr.parser import parse_script

STRINGS_SCRIPT = r'''// strings: literals, escapes, concatenation, comparison, length, replacement
let heart = "Test string: ❤";
print(heart);
let x = "Test string: \x58";
print(x);
print("smile: \U0001F603");
let foo = "foo";
print(foo + " bar");
print(foo + 42);
print("foo" < "bar");
print("foo" >= "bar");
let s = "hello, world!";
print(s.len());
s[12] = '?';
print(s);
'''

EXPECTED_OUTPUT = [
    "Test string: ❤",
    "Test string: X",
    "smile: \U0001F603",
    "foo bar",
    "foo42",
    "false",
    "true",
    "13",
    "hello, world?",
]


def build_example_script() -> Script:
    return parse_script(STRINGS_SCRIPT, name="strings")
