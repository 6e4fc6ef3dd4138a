"""Hollerith (IBM 7090 BCD) character codes and the SLIP HASH function.

Six bits per character, six characters per 36-bit machine word. SLIP
stores a word left-justified and space padded in one cell; longer words
continue into further cells, so the last cell holds the last 6-character
chunk of the word.

HASH returns the middle N bits of the datum squared (mid-square). The
7090 is sign-magnitude, so only the low 35 bits take part in the square.
"""

# BCD code is the table offset. None means unused code.
# Code 014 (octal) is a single quote (prime), not a double quote.
BCD_TABLE = (
    "0", "1", "2", "3", "4", "5", "6", "7", "8", "9", None, "=", "'", None, None, None,
    "+", "A", "B", "C", "D", "E", "F", "G", "H", "I", None, ".", ")", None, None, None,
    "-", "J", "K", "L", "M", "N", "O", "P", "Q", "R", None, "$", "*", None, None, None,
    " ", "/", "S", "T", "U", "V", "W", "X", "Y", "Z", None, ",", "(", None, None, None,
)

# Reverse lookup: character -> 6-bit code
CHAR_TO_BCD = {c: i for i, c in enumerate(BCD_TABLE) if c is not None}

CHUNK_CHARS = 6
WORD_BITS = 36
MAGNITUDE_MASK = (1 << (WORD_BITS - 1)) - 1   # 0o377777777777
MAX_HASH_BITS = 15


def hollerith_defined(ch: str) -> bool:
    """True iff ch exists in the Hollerith character set."""
    return ch in CHAR_TO_BCD


def filter_bcd(text: str) -> str:
    """Map '?' and '!' to '.', anything outside the Hollerith set to space."""
    out = []
    for ch in text:
        if ch in ("?", "!"):
            out.append(".")
        elif ch in CHAR_TO_BCD:
            out.append(ch)
        else:
            out.append(" ")
    return "".join(out)


def last_chunk_as_bcd(word: str) -> int:
    """Encode the last 6-character chunk of word as a 36-bit Hollerith datum.

    e.g. "HERE" -> 0o302551256060, "INVENTED" -> "ED    " -> 0o252460606060
    """
    if word:
        start = ((len(word) - 1) // CHUNK_CHARS) * CHUNK_CHARS
        chunk = word[start:]
    else:
        chunk = ""
    chunk = chunk.ljust(CHUNK_CHARS)

    datum = 0
    for ch in chunk:
        code = CHAR_TO_BCD.get(ch)
        if code is None:
            raise ValueError(f"Character {ch!r} has no Hollerith encoding")
        datum = (datum << 6) | code
    return datum


def slip_hash(datum: int, bits: int) -> int:
    """Return a bits-wide hash of the 36-bit datum (SLIP HASH.(D,N)).

    Clear the sign bit, square the 35-bit magnitude, move the middle
    bits of the 70-bit product down and mask off all but the low bits.
    """
    if not 0 <= bits <= MAX_HASH_BITS:
        raise ValueError(f"Hash width must be 0-{MAX_HASH_BITS}, got {bits}")
    magnitude = datum & MAGNITUDE_MASK
    square = magnitude * magnitude
    return (square >> (35 - bits // 2)) & ((1 << bits) - 1)


def hash_word(word: str, bits: int) -> int:
    """Hash the last SLIP cell of word, as ELIZA does for MEMORY selection."""
    return slip_hash(last_chunk_as_bcd(word), bits)
