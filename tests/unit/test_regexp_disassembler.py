import re

import pytest

from uiquery.selectors.regexp_disassembler import RegexpDisassembler


@pytest.mark.parametrize(
    "pattern, expected",
    [
        (r"foo", ["foo"]),
        (r"^foo$", ["foo"]),
        (r"foo.*bar", ["foo", "bar"]),
        (r"ab?c", ["a", "c"]),
        (r"abc+d", ["abc", "d"]),
        (r"ab{2}c", ["ab", "c"]),
        (r"a\.b", ["a.b"]),
        (r"a\db", ["a", "b"]),
        (r"x\x41y", ["x", "y"]),
        (r"\N{LATIN SMALL LETTER A}b", ["ab"]),
        (r"a\101b", ["a", "b"]),
        (r"(x)y\1z", ["y", "z"]),
        (r"pre[0-9]+post", ["pre", "post"]),
        (r"start(ignored)?end", ["start", "end"]),
    ],
)
def test_required_substrings(pattern, expected):
    assert RegexpDisassembler(re.compile(pattern)).substrings() == expected


def test_alternation_yields_one_list_per_branch():
    dis = RegexpDisassembler(re.compile(r"foo|ba+r"))
    assert dis.alternated_substrings() == [["foo"], ["ba", "r"]]
    # no single required set across branches
    assert dis.substrings() == []


def test_branch_without_literals_disables_filtering():
    assert RegexpDisassembler(re.compile(r"foo|.*")).alternated_substrings() == []
    assert RegexpDisassembler(re.compile(r"\d+")).substrings() == []


def test_casefold_uppercases_literals():
    dis = RegexpDisassembler(re.compile("Email", re.IGNORECASE))
    assert dis.casefold
    assert dis.substrings() == ["EMAIL"]


def test_verbose_patterns_are_not_disassembled():
    assert RegexpDisassembler(re.compile("foo # comment", re.VERBOSE)).substrings() == []


def test_accepts_pattern_source_string():
    assert RegexpDisassembler("a+b").substrings() == ["a", "b"]


def test_casefold_drops_characters_xpath_cannot_fold():
    dis = RegexpDisassembler(re.compile("café crème", re.IGNORECASE))
    assert dis.substrings() == ["CAF", " CR", "ME"]
    # without ignore-case the accents are kept
    assert RegexpDisassembler(re.compile("café")).substrings() == ["café"]
