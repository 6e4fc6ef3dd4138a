"""Engine tokenizer — user text to word sequence.

Text goes through the same reduction the 7090 console imposed on it:
  - Lowercase is folded to uppercase
  - '?' and '!' become '.'
  - Characters outside the Hollerith set become spaces
  - Spaces separate words and are discarded
  - Period and comma are words in their own right

Delimiters end a clause during the keyword scan: period, comma and the
word BUT.
"""

from eliza.core.hollerith import filter_bcd


PUNCTUATION = (",", ".")
DELIMITER_WORDS = ("BUT",)


def is_punctuation(ch):
    return ch in PUNCTUATION


def is_delimiter(word):
    """True iff word ends a clause: '.', ',' or BUT."""
    return word in DELIMITER_WORDS or word in PUNCTUATION


def split(text):
    """Split text into words; punctuation characters are words.

    e.g. split("one   two, three.") -> ["one", "two", ",", "three", "."]
    """
    words = []
    word = []
    for ch in text:
        if ch == " " or is_punctuation(ch):
            if word:
                words.append("".join(word))
                word = []
            if ch != " ":
                words.append(ch)
        else:
            word.append(ch)
    if word:
        words.append("".join(word))
    return words


def join(words):
    """Join words into one space separated string, skipping empty words.

    e.g. join(["one", "", "two", ",", "3", "."]) -> "one two , 3 ."
    """
    return " ".join(w for w in words if w)


def tokenize(text):
    """Normalize a line of user input into the word sequence ELIZA scans.

    Only ASCII letters are uppercased; anything else outside the Hollerith
    set becomes a space.

    e.g. tokenize("Hello, world!") -> ["HELLO", ",", "WORLD", "."]
    """
    return split(filter_bcd("".join(c.upper() if c.isascii() else c for c in text)))
