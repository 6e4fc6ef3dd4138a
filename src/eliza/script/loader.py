"""Script loader — ELIZA script text to an immutable Script.

Script grammar:

    eliza_script    : opening_remarks ['START'] rules ['(' ')']
    opening_remarks : '(' {word} ')'
    rules           : {keyword_rule | memory_rule}
    keyword_rule    : '(' keyword ['=' substitute] ['DLIST' '(' tags ')'] [precedence]
                          {transformation} [reference] ')'
    memory_rule     : '(' 'MEMORY' keyword 4 x ('(' decompose '=' reassemble ')') ')'
    reference       : '(' '=' keyword ')' | '(' '=keyword' ')'
    transformation  : '(' '(' decompose ')' reassemble_rule {reassemble_rule} ')'
    reassemble_rule : '(' terms ')' | '(' '=keyword' ')' | '(' 'NEWKEY' ')'
                    | '(' 'PRE' '(' terms ')' '(' '=keyword' ')' ')'

A bracketed group inside a list, e.g. (* SAD HAPPY) or (/FAMILY), is kept
as a single term "(* SAD HAPPY)".

A script must have a NONE rule and a MEMORY rule, and the MEMORY keyword
must also have a keyword rule of its own.
"""
from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType

from eliza.engine.rules import (
    MEMORY_TRANSFORMS, NONE_KEYWORD, Reassembly, Rule, Transform, collect_tags,
)

from .reader import ScriptTokenizer
from .writer import to_sexp

log = logging.getLogger(__name__)


class ScriptError(ValueError):
    """Script text could not be loaded."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is None:
            super().__init__(f"Script error: {message}")
        else:
            super().__init__(f"Script error on line {line}: {message}")


@dataclass(frozen=True)
class Script:
    """A loaded ELIZA script. Never modified after loading.

    rules and tags are read-only mappings; digest is the SHA-1 of the
    canonical script text, filled in by the reader.
    """
    greeting: tuple[str, ...]
    rules: Mapping[str, Rule]
    memory: Rule
    tags: Mapping[str, list[str]] = field(default_factory=dict)
    digest: str = ""

    def fingerprint(self) -> str:
        """Identifies the script; equal for texts that load the same."""
        return self.digest or _digest(self)


def _digest(script: Script) -> str:
    return hashlib.sha1(to_sexp(script).encode("utf-8")).hexdigest()


class ScriptReader:
    """Recursive descent reader over a ScriptTokenizer."""

    def __init__(self, text: str):
        self.tok = ScriptTokenizer(text)
        self.rules: dict[str, Rule] = {}
        self.memory: Rule | None = None

    def error(self, message: str) -> ScriptError:
        return ScriptError(message, self.tok.line)

    def read(self) -> Script:
        greeting = self.rdlist()
        if self.tok.peek().is_symbol("START"):
            self.tok.next()

        while self.read_rule():
            pass

        if NONE_KEYWORD not in self.rules:
            raise ScriptError("no NONE rule specified; see Jan 1966 CACM page 41")
        if self.memory is None:
            raise ScriptError("no MEMORY rule specified; see Jan 1966 CACM page 41")
        if self.memory.keyword not in self.rules:
            raise ScriptError(
                f"MEMORY rule keyword '{self.memory.keyword}' is not also a "
                f"keyword in its own right; see Jan 1966 CACM page 41")

        log.debug("Loaded script: %d rules, MEMORY %s", len(self.rules), self.memory.keyword)
        script = Script(
            greeting=tuple(greeting),
            rules=MappingProxyType(self.rules),
            memory=self.memory,
            tags=MappingProxyType(collect_tags(self.rules)),
        )
        return replace(script, digest=_digest(script))

    def rdlist(self, prior: bool = True) -> list[str]:
        """Read the terms of a bracketed list.

        With prior, the next token must be the opening bracket; otherwise
        it has already been consumed.
        """
        terms = []
        t = self.tok.next()
        if prior:
            if not t.is_open:
                raise self.error("expected '('")
            t = self.tok.next()
        while not t.is_close:
            if t.is_symbol() or t.is_number:
                terms.append(t.value)
            elif t.is_open:
                terms.append(self.read_group())
            else:
                raise self.error("expected ')'")
            t = self.tok.next()
        return terms

    def read_group(self) -> str:
        """Read a nested group (opening bracket consumed) as one term."""
        words = []
        t = self.tok.next()
        while not t.is_close:
            if not t.is_symbol():
                raise self.error("expected symbol")
            words.append(t.value)
            t = self.tok.next()
        return "(" + " ".join(words) + ")"

    def read_rule(self) -> bool:
        """Read one rule of any kind; False at end of text."""
        t = self.tok.next()
        if t.is_eof:
            return False
        if not t.is_open:
            raise self.error("expected '('")
        t = self.tok.peek()
        if t.is_close:
            # empty list that may end a script
            self.tok.next()
            return True
        if not t.is_symbol():
            raise self.error("expected keyword|MEMORY|NONE")
        if t.value == "MEMORY":
            self.read_memory_rule()
        else:
            self.read_keyword_rule()
        return True

    def read_keyword_rule(self):
        keyword = self.tok.next().value
        if keyword == "NONE":
            keyword = NONE_KEYWORD
        if keyword in self.rules:
            raise self.error(f"keyword rule already specified for keyword '{keyword}'")

        substitution = ""
        precedence = 0
        tags: list[str] = []
        transforms: list[Transform] = []
        link = ""

        t = self.tok.next()
        while not t.is_close:
            if t.is_symbol("="):
                t = self.tok.next()
                if not t.is_symbol():
                    raise self.error("expected keyword")
                substitution = t.value
            elif t.is_number:
                precedence = int(t.value)
            elif t.is_symbol("DLIST"):
                tags = self.rdlist()
            elif t.is_open:
                t = self.tok.peek()
                if t.is_symbol() and t.value.startswith("="):
                    link = self.read_reference()
                else:
                    transforms.append(self.read_transform())
            else:
                raise self.error("malformed rule")
            t = self.tok.next()

        self.rules[keyword] = Rule.keyword_rule(
            keyword, substitution, precedence, tags, transforms, link)

    def read_reference(self) -> str:
        """(=KEYWORD) or (= KEYWORD), opening bracket consumed; must end the rule."""
        t = self.tok.next()
        if t.is_symbol("="):
            t = self.tok.next()
            if not t.is_symbol():
                raise self.error("expected equivalence class name")
            name = t.value
        elif len(t.value) > 1:
            name = t.value[1:]
        else:
            raise self.error("expected equivalence class name")
        if not self.tok.next().is_close:
            raise self.error("expected ')'")
        if not self.tok.peek().is_close:
            raise self.error("expected ')'")
        return name

    def read_transform(self) -> Transform:
        decomposition = self.rdlist()
        reassemblies = [self.read_reassembly()]
        while self.tok.peek().is_open:
            reassemblies.append(self.read_reassembly())
        if not self.tok.next().is_close:
            raise self.error("expected ')'")
        return Transform(tuple(decomposition), tuple(reassemblies))

    def read_reassembly(self) -> Reassembly:
        if not self.tok.next().is_open:
            raise self.error("expected '('")
        if not self.tok.peek().is_symbol("PRE"):
            return Reassembly.from_terms(self.rdlist(prior=False))

        # (PRE (I ARE 3) (=YOU))
        self.tok.next()
        reconstruct = self.rdlist()
        reference = self.rdlist()
        if len(reference) == 1 and len(reference[0]) > 1 and reference[0].startswith("="):
            link = reference[0][1:]
        elif len(reference) == 2 and reference[0] == "=":
            link = reference[1]
        else:
            raise self.error("expected equivalence class name")
        if not self.tok.next().is_close:
            raise self.error("expected ')'")
        return Reassembly.pre(reconstruct, link)

    def read_memory_rule(self):
        """(MEMORY MY (0 YOUR 0 = LETS DISCUSS FURTHER WHY YOUR 3) ...)"""
        self.tok.next()
        t = self.tok.next()
        if not t.is_symbol():
            raise self.error("expected keyword")
        if self.memory is not None:
            raise self.error("multiple MEMORY rules specified")
        keyword = t.value

        transforms = []
        while self.tok.peek().is_open:
            self.tok.next()
            transforms.append(self.read_memory_pair())
        if not self.tok.next().is_close:
            raise self.error("expected ')'")
        if len(transforms) != MEMORY_TRANSFORMS:
            raise self.error(
                f"MEMORY rule must have {MEMORY_TRANSFORMS} transformations, got {len(transforms)}")

        self.memory = Rule.memory_rule(keyword, transforms)

    def read_memory_pair(self) -> Transform:
        decomposition = []
        t = self.tok.next()
        while not t.is_symbol("="):
            if t.is_eof or t.is_close:
                raise self.error("expected '='")
            decomposition.append(self.read_group() if t.is_open else t.value)
            t = self.tok.next()

        reassembly = []
        t = self.tok.next()
        while not t.is_close:
            if t.is_eof:
                raise self.error("expected ')'")
            reassembly.append(self.read_group() if t.is_open else t.value)
            t = self.tok.next()

        return Transform(tuple(decomposition), (Reassembly.from_terms(reassembly),))


def load(text: str) -> Script:
    """Read script text; raise ScriptError if it is malformed."""
    return ScriptReader(text).read()


def load_file(path) -> Script:
    """Read a script from a UTF-8 text file."""
    return load(Path(path).read_text(encoding="utf-8"))
