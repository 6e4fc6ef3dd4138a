"""Conversation memory — remarks saved for later, recalled when nothing else fits.

When the memory keyword is picked off the keystack, the input is matched
against one of the MEMORY rule's four decompositions, chosen by hashing
the last word of the input. A match is reassembled and queued. When a
later input has no keyword at all and the fallback counter reads 4, the
oldest queued remark is given instead of a fallback message.
"""
from __future__ import annotations

from collections import deque

from eliza.core.hollerith import hash_word

from .match import match
from .reassemble import reassemble
from .tokenizer import join


# Two hash bits select one of the MEMORY rule's four transforms
MEMORY_HASH_BITS = 2


class Memory:
    """FIFO queue of reassembled remarks, bound to a MEMORY rule."""

    def __init__(self, rule, memories=()):
        self.rule = rule
        self._queue = deque(memories)

    @property
    def keyword(self) -> str:
        return self.rule.keyword

    def create(self, keyword, words, tags) -> list[str]:
        """Queue a memory for words if keyword is the memory keyword.

        Returns trace lines describing what happened.
        """
        if keyword != self.rule.keyword or not words:
            return []
        index = hash_word(words[-1], MEMORY_HASH_BITS)
        transform = self.rule.transforms[index]
        components = match(tags, transform.decomposition, words)
        if components is None:
            return []
        remark = join(reassemble(transform.reassemblies[0].words, components))
        self._queue.append(remark)
        return [f"    new memory: {remark}"]

    def exists(self) -> bool:
        return bool(self._queue)

    def recall(self) -> str:
        """Remove and return the oldest memory."""
        return self._queue.popleft()

    def pending(self) -> list[str]:
        """Queued memories, oldest first."""
        return list(self._queue)

    def __len__(self):
        return len(self._queue)
