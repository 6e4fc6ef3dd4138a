"""Reassembly — decomposition components back to a word sequence.

A reassembly template is a list of words and 1-based component indexes:

    reassemble(["DID", "1", "HAVE", "A", "3"],
               ["MARY", "HAD A", "LITTLE LAMB", "ITS", "PROBABILITY", "WAS ZERO"])
        -> ["DID", "MARY", "HAVE", "A", "LITTLE", "LAMB"]

An index outside the components is a script defect; it is rendered as a
marker word rather than raised.
"""

from .match import to_int
from .tokenizer import split


INDEX_ERROR_MARKER = "SCRIPT-ERROR-REASSEMBLY-RULE-INDEX-OUT-OF-RANGE"


def reassemble(template, components):
    """Build a new word list from template and matched components."""
    result = []
    for term in template:
        n = to_int(term)
        if n < 0:
            result.append(term)
        elif n == 0 or n > len(components):
            result.append(INDEX_ERROR_MARKER)
        else:
            result.extend(split(components[n - 1]))
    return result
