"""Decomposition pattern matching.

A pattern is a list of terms matched left to right against a word list:

    WORD            the next word must be WORD
    (* A B C)       the next word must be one of A, B, C
    (/ NAME)        the next word must be tagged NAME (see collect_tags)
    N  (N > 0)      exactly N words, any words
    0               zero or more words, shortest first

A match partitions the whole word list. The result holds one component
per pattern term: the matched word, or the matched words joined by
spaces for the numeric terms.

    match({}, ["0", "YOU", "(* WANT NEED)", "0"], ["YOU", "NEED", "NICE", "FOOD"])
        -> ["", "YOU", "NEED", "NICE FOOD"]
"""

from .tokenizer import split, join


def to_int(term):
    """Numeric value of term, or -1 if term is not all digits."""
    if term.isascii() and term.isdigit():
        return int(term)
    return -1


def inlist(word, group, tags):
    """True iff word belongs to the group term.

    e.g. inlist("DEPRESSED", "(*SAD HAPPY DEPRESSED)", {}) -> True
    e.g. inlist("FATHER", "(/FAMILY)", tags) -> True when tags["FAMILY"] holds FATHER
    """
    body = group
    if body.endswith(")"):
        body = body[:-1]
    if body.startswith("("):
        body = body[1:]

    members = []
    if body.startswith("*"):
        members = split(body[1:].lstrip(" "))
    elif body.startswith("/"):
        members = tags.get(body[1:].lstrip(" "), [])
    return word in members


def match(tags, pattern, words):
    """Match words against pattern; return the components or None."""
    return _match(tags, pattern, 0, words, 0)


def _match(tags, pattern, pi, words, wi):
    if pi == len(pattern):
        return [] if wi == len(words) else None

    term = pattern[pi]
    n = to_int(term)

    if n < 0:
        # a literal word or a (* ...) / (/ ...) group; consumes one word
        if wi == len(words):
            return None
        current = words[wi]
        if term.startswith("("):
            if not inlist(current, term, tags):
                return None
        elif term != current:
            return None
        rest = _match(tags, pattern, pi + 1, words, wi + 1)
        if rest is None:
            return None
        return [current] + rest

    if n == 0:
        # zero or more words: try the shortest component first
        for end in range(wi, len(words) + 1):
            rest = _match(tags, pattern, pi + 1, words, end)
            if rest is not None:
                return [join(words[wi:end])] + rest
        return None

    # exactly n words
    if len(words) - wi < n:
        return None
    rest = _match(tags, pattern, pi + 1, words, wi + n)
    if rest is None:
        return None
    return [join(words[wi:wi + n])] + rest
