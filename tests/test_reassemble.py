"""Tests for eliza.engine.reassemble."""

from eliza.engine.match import match
from eliza.engine.reassemble import INDEX_ERROR_MARKER, reassemble


COMPONENTS = ["MARY", "HAD A", "LITTLE LAMB", "ITS", "PROBABILITY", "WAS ZERO"]


class TestReassemble:
    def test_slip_assmbl_example(self):
        assert reassemble(["DID", "1", "HAVE", "A", "3"], COMPONENTS) == [
            "DID", "MARY", "HAVE", "A", "LITTLE", "LAMB"]

    def test_literals_only(self):
        assert reassemble(["IN", "WHAT", "WAY"], COMPONENTS) == ["IN", "WHAT", "WAY"]

    def test_component_split_into_words(self):
        assert reassemble(["6"], COMPONENTS) == ["WAS", "ZERO"]

    def test_empty_component_adds_nothing(self):
        assert reassemble(["A", "1", "B"], ["", "X"]) == ["A", "B"]

    def test_index_out_of_range(self):
        assert reassemble(["SAY", "7"], COMPONENTS) == ["SAY", INDEX_ERROR_MARKER]

    def test_zero_index_is_error(self):
        assert reassemble(["0"], COMPONENTS) == [INDEX_ERROR_MARKER]

    def test_fragment_law(self):
        # reassembling every component in order gives back the input
        words = ["YOU", "KNOW", "THAT", "I", "KNOW", "YOU"]
        components = match({}, ["0", "YOU", "0", "I", "0"], words)
        template = [str(n) for n in range(1, len(components) + 1)]
        assert reassemble(template, components) == words
