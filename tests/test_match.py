"""Tests for eliza.engine.match — decomposition patterns."""
import pytest

from eliza.engine.match import inlist, match, to_int


class TestToInt:
    def test_digits(self):
        assert to_int("0") == 0
        assert to_int("2") == 2
        assert to_int("007") == 7

    def test_not_a_number(self):
        assert to_int("two") == -1
        assert to_int("2A") == -1
        assert to_int("-1") == -1


class TestInlist:
    def test_star_group(self):
        assert inlist("DEPRESSED", "(*SAD HAPPY DEPRESSED)", {})
        assert inlist("SAD", "(* SAD HAPPY DEPRESSED)", {})
        assert not inlist("GLAD", "(*SAD HAPPY DEPRESSED)", {})

    def test_tag_group(self):
        tags = {"FAMILY": ["FATHER", "MOTHER"]}
        assert inlist("FATHER", "(/FAMILY)", tags)
        assert inlist("MOTHER", "(/ FAMILY)", tags)
        assert not inlist("SISTER", "(/FAMILY)", tags)

    def test_unknown_tag(self):
        assert not inlist("FATHER", "(/NOUN)", {})

    def test_tag_is_whole_name(self):
        tags = {"BELIEF": ["FEEL"]}
        assert not inlist("FEEL", "(/BELIEFS)", tags)

    def test_tag_group_names_one_tag(self):
        tags = {"NOUN": ["FATHER"], "FAMILY": ["FATHER"]}
        assert not inlist("FATHER", "(/NOUN FAMILY)", tags)

    def test_plain_group_matches_nothing(self):
        assert not inlist("A", "(A B)", {})


class TestMatch:
    @pytest.mark.parametrize("pattern,words,expected", [
        (["0", "YOU", "(*WANT NEED)", "0"],
         ["YOU", "NEED", "NICE", "FOOD"],
         ["", "YOU", "NEED", "NICE FOOD"]),
        (["0", "0", "YOU", "(*WANT NEED)", "0"],
         ["YOU", "WANT", "NICE", "FOOD"],
         ["", "", "YOU", "WANT", "NICE FOOD"]),
        (["1", "(*WANT NEED)", "0"],
         ["YOU", "WANT", "NICE", "FOOD"],
         ["YOU", "WANT", "NICE FOOD"]),
        (["1", "(*WANT NEED)", "2"],
         ["YOU", "WANT", "NICE", "FOOD"],
         ["YOU", "WANT", "NICE FOOD"]),
        (["0", "YOUR", "0", "(* FATHER MOTHER)", "0"],
         ["CONSIDER", "YOUR", "AGED", "MOTHER", "AND", "FATHER", "TOO"],
         ["CONSIDER", "YOUR", "AGED", "MOTHER", "AND FATHER TOO"]),
        (["2", "0", "2"],
         ["FIRST", "AND", "LAST", "TWO", "WORDS"],
         ["FIRST AND", "LAST", "TWO WORDS"]),
        (["0", "0", "7"],
         ["THE", "NAME", "IS", "BOND", "JAMES", "BOND", "OR", "007", "IF", "YOU", "PREFER"],
         ["", "THE NAME IS BOND", "JAMES BOND OR 007 IF YOU PREFER"]),
        (["MARY", "2", "2", "ITS", "1", "0"],
         ["MARY", "HAD", "A", "LITTLE", "LAMB", "ITS", "PROBABILITY", "WAS", "ZERO"],
         ["MARY", "HAD A", "LITTLE LAMB", "ITS", "PROBABILITY", "WAS ZERO"]),
        (["1", "0", "2", "ITS", "0"],
         ["MARY", "HAD", "A", "LITTLE", "LAMB", "ITS", "PROBABILITY", "WAS", "ZERO"],
         ["MARY", "HAD A", "LITTLE LAMB", "ITS", "PROBABILITY WAS ZERO"]),
    ])
    def test_matches(self, pattern, words, expected):
        assert match({}, pattern, words) == expected

    def test_fixed_width_mismatch(self):
        assert match({}, ["1", "(*WANT NEED)", "1"], ["YOU", "WANT", "NICE", "FOOD"]) is None

    def test_zero_is_shortest_first(self):
        words = ["ITS", "MARY", "ITS", "NOT", "MARY", "IT", "IS", "MARY", "TOO"]
        assert match({}, ["0", "ITS", "0", "MARY", "1"], words) == [
            "", "ITS", "MARY ITS NOT MARY IT IS", "MARY", "TOO"]

    def test_first_occurrence_wins(self):
        words = ["YOU", "KNOW", "THAT", "I", "KNOW", "YOU", "HATE", "I",
                 "AND", "YOU", "LIKE", "I", "TOO"]
        assert match({}, ["0", "YOU", "0", "I", "0"], words) == [
            "", "YOU", "KNOW THAT", "I", "KNOW YOU HATE I AND YOU LIKE I TOO"]

    def test_tagged_term(self):
        tags = {"FAMILY": ["FATHER", "MOTHER"]}
        assert match(tags, ["0", "YOUR", "0", "(/FAMILY)", "0"],
                     ["MY", "YOUR", "MOTHER", "CARES"]) == [
            "MY", "YOUR", "", "MOTHER", "CARES"]

    def test_literal_prefix_with_trailing_zero_always_matches(self):
        for tail in ([], ["A"], ["A", "B", "C"]):
            assert match({}, ["I", "AM", "0"], ["I", "AM"] + tail) == [
                "I", "AM", " ".join(tail)]

    def test_literal_mismatch(self):
        assert match({}, ["I", "AM", "0"], ["I", "WAS", "HAPPY"]) is None

    def test_empty_pattern(self):
        assert match({}, [], []) == []
        assert match({}, [], ["A"]) is None

    def test_lone_zero_matches_empty(self):
        assert match({}, ["0"], []) == [""]

    def test_words_not_modified(self):
        words = ["YOU", "NEED", "FOOD"]
        match({}, ["0", "YOU", "0"], words)
        assert words == ["YOU", "NEED", "FOOD"]
