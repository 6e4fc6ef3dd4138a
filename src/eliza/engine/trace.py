"""Tracers — a window on the dispatcher while it builds a response.

Eliza calls one hook per step. The base Tracer ignores them all;
TextTracer records a readable account of the last response; PreTracer
prints the words each time a keyword is about to be applied, which is
the easiest way to watch PRE rules rewrite input.
"""
from __future__ import annotations

from .tokenizer import join


class Tracer:
    """Does nothing; subclass and override the hooks of interest."""

    def begin_response(self):
        pass

    def limit(self, limit):
        pass

    def memory_stack(self, memories):
        pass

    def keystack(self, keystack, rules):
        pass

    def using_memory(self):
        pass

    def pre_transform(self, keyword, words):
        pass

    def unknown_key(self, keyword):
        pass

    def create_memory(self, lines):
        pass

    def transform(self, lines):
        pass

    def decomp_failed(self):
        pass

    def using_none(self):
        pass


class PreTracer(Tracer):
    """Print the word list before each keyword's transformation."""

    def __init__(self, out=print):
        self._out = out

    def pre_transform(self, keyword, words):
        self._out(f"{join(words)}   :{keyword}")


class TextTracer(Tracer):
    """Accumulate a text trace of the most recent response."""

    def __init__(self):
        self._lines: list[str] = []

    def text(self) -> str:
        return "".join(line + "\n" for line in self._lines)

    def clear(self):
        self._lines = []

    def begin_response(self):
        self._lines = []

    def limit(self, limit):
        self._lines.append(f"  LIMIT: {limit}")

    def memory_stack(self, memories):
        self._lines.append("  memory stack:")
        self._lines.extend(f"    {m}" for m in memories)

    def keystack(self, keystack, rules):
        if not keystack:
            self._lines.append("  keyword stack: <empty>")
            return
        entries = []
        for keyword in keystack:
            rule = rules.get(keyword)
            if rule is None:
                detail = "<unknown keyword>"
            elif rule.has_transformation():
                detail = str(rule.precedence)
            else:
                detail = "<no transform associated with this keyword>"
            entries.append(f"{keyword}({detail})")
        self._lines.append("  keyword stack: " + ", ".join(entries))

    def using_memory(self):
        self._lines.append("  (recalling a stored memory)")

    def unknown_key(self, keyword):
        self._lines.append(f'  ill-formed script: "{keyword}" is not a keyword')

    def create_memory(self, lines):
        self._lines.extend(lines)

    def transform(self, lines):
        self._lines.extend(lines)

    def decomp_failed(self):
        self._lines.append("  ill-formed script: no decomposition rule matched input")

    def using_none(self):
        self._lines.append("  (using a message from NONE)")
