import pytest

from gini import IniSyntaxError
from gini import loose
from gini.loose import tokenize
from gini.tokenizer import Triple
from gini.tokenizer import tokenize as fsm_tokenize

TEST_INI = "key1=value1\nkey2 = value2 \n\n[section3]\nfoo = bar baz qux\t \t\nempty_key_1=\n[key-less]\n=foo\n=bar\n"


def test_tokenize_matches_fsm():
    assert list(tokenize(TEST_INI)) == list(fsm_tokenize(TEST_INI))


def test_tokenize_loose_names():
    triples = list(tokenize("[foo.bar.]\nsome key = value\nfoo--bar=1\n"))

    assert triples == [
        Triple("foo.bar.", "some key", "value"),
        Triple("foo.bar.", "foo--bar", "1"),
    ]


def test_tokenize_comments():
    text = "# comment\r\n[ section ] ; trailing comment\r  ; indented comment\rkey=value # kept\r\n"

    assert list(tokenize(text)) == [Triple("section", "key", "value # kept")]


@pytest.mark.parametrize("ini", ["", "\r\n", "[]", "[foo]", "=\n= \t"])
def test_tokenize_empty(ini: str):
    assert list(tokenize(ini)) == []


@pytest.mark.parametrize(
    "ini, line",
    [
        ("foo", 1),
        ("a=1\r\nfoo", 2),
        ("a=1\r\rfoo", 3),
        ("[foo", 1),
        ("[]foo", 1),
    ],
)
def test_tokenize_syntax_error(ini: str, line: int):
    with pytest.raises(IniSyntaxError) as excinfo:
        list(tokenize(ini))

    assert excinfo.value.line == line
    assert excinfo.value.column == 1
    assert excinfo.value.expectation == "Expected section, key or comment."


def test_tokenize_is_lazy():
    triples = tokenize("a=1\r\nb=2\r?")

    assert next(triples) == Triple(None, "a", "1")
    assert next(triples) == Triple(None, "b", "2")

    with pytest.raises(IniSyntaxError) as excinfo:
        next(triples)

    assert excinfo.value.line == 3


def test_lines():
    lines = loose._lines("a\r\nb\rc\n\n")

    assert next(lines) == "a"
    assert list(lines) == ["b", "c", "", ""]
