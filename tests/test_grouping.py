from gini.grouping import (
    Entry,
    SectionGroup,
    group_adjacent,
    same_section,
    same_section_exact,
)
from gini.tokenizer import Triple


def test_same_section():
    assert same_section("Foo", "fOO")
    assert same_section(None, None)
    assert not same_section(None, "")
    assert not same_section("foo", "bar")

    assert not same_section_exact("Foo", "foo")
    assert same_section_exact(None, None)


def test_group_adjacent():
    triples = [
        Triple("a", "x", "1"),
        Triple("a", "y", "2"),
        Triple(None, "z", "3"),
        Triple("a", "w", None),
    ]

    assert list(group_adjacent(triples)) == [
        SectionGroup("a", (Entry("x", "1"), Entry("y", "2"))),
        SectionGroup(None, (Entry("z", "3"),)),
        SectionGroup("a", (Entry("w", None),)),
    ]


def test_group_adjacent_empty():
    assert list(group_adjacent([])) == []


def test_group_adjacent_keeps_first_spelling():
    triples = [Triple("Foo", "x", "1"), Triple("FOO", "y", "2")]

    (group,) = group_adjacent(triples)
    assert group.name == "Foo"
    assert len(group) == 2


def test_group_adjacent_case_sensitive():
    triples = [Triple("Foo", "x", "1"), Triple("FOO", "y", "2")]

    groups = list(group_adjacent(triples, eq=same_section_exact))
    assert [g.name for g in groups] == ["Foo", "FOO"]


def test_group_adjacent_is_lazy():
    def triples():
        yield Triple("a", "x", "1")
        yield Triple("b", "y", "2")
        raise RuntimeError("read too far")

    groups = group_adjacent(triples())
    assert next(groups).name == "a"


def test_section_group_to_dict():
    group = SectionGroup("a", (Entry("x", "1"), Entry(None, "2"), Entry("x", "3")))

    assert list(group) == list(group.entries)
    assert group.to_dict() == {"x": "3", None: "2"}
