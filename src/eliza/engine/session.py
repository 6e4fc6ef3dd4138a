"""ELIZA session — one conversation against a loaded script.

    script = load(CACM_1966_01_DOCTOR_SCRIPT)
    eliza = Eliza(script)
    eliza.respond("Men are all alike.")   # -> "IN WHAT WAY"

A session owns everything that changes while talking: the conversation
counter (LIMIT), the memory queue and the reassembly cursors. The script
itself is never modified, so any number of sessions may share one.
"""
from __future__ import annotations

import logging

from .memory import Memory
from .rules import Action, NONE_KEYWORD, apply_transformation
from .tokenizer import is_delimiter, join, tokenize
from .trace import Tracer

log = logging.getLogger(__name__)


# Hard-coded replies for script inconsistencies, selected by LIMIT
NOMATCH_MESSAGES = (
    "PLEASE CONTINUE",
    "HMMM",
    "GO ON, PLEASE",
    "I SEE",
)

SNAPSHOT_VERSION = 1

# Links followed in one response before the script is taken to be cyclic
MAX_LINKS = 256


class Eliza:
    """Conversation state plus the response algorithm."""

    def __init__(self, script, use_nomatch_messages: bool = True,
                 tracer: Tracer | None = None):
        self.script = script
        self.use_nomatch_messages = use_nomatch_messages
        self.tracer = tracer or Tracer()
        self.limit = 1
        self.memory = Memory(script.memory)
        self.cursors: dict[tuple[str, int], int] = {}

    @property
    def greeting(self) -> str:
        return join(self.script.greeting)

    def set_tracer(self, tracer: Tracer | None):
        self.tracer = tracer or Tracer()

    def respond(self, text: str) -> str:
        """Produce ELIZA's reply to one line of user input."""
        rules = self.script.rules
        tracer = self.tracer
        tracer.begin_response()

        words = tokenize(text)

        # "a certain counting mechanism": cycles 1..4
        self.limit = self.limit % 4 + 1
        tracer.limit(self.limit)

        keystack = self._scan(words)

        tracer.memory_stack(self.memory.pending())
        if not keystack:
            tracer.keystack(keystack, rules)
            if self.limit == 4 and self.memory.exists():
                tracer.using_memory()
                return self.memory.recall()

        links = 0
        while keystack:
            tracer.keystack(keystack, rules)
            keyword = keystack.pop(0)
            tracer.pre_transform(keyword, words)

            rule = rules.get(keyword) if links <= MAX_LINKS else None
            if rule is None:
                log.debug("Keyword %s has no rule (%d links followed)", keyword, links)
                tracer.unknown_key(keyword)
                if self.use_nomatch_messages:
                    return NOMATCH_MESSAGES[self.limit - 1]
                break

            tracer.create_memory(self._lay_down_memory(keyword, words))

            outcome = apply_transformation(rule, words, self.script.tags, self.cursors)
            tracer.transform(outcome.trace)

            if outcome.action is Action.COMPLETE:
                return join(outcome.words)
            if outcome.action is Action.INAPPLICABLE:
                log.debug("No decomposition of %s matched %r", keyword, join(words))
                tracer.decomp_failed()
                if self.use_nomatch_messages:
                    return NOMATCH_MESSAGES[self.limit - 1]
                break
            if outcome.action is Action.LINKKEY:
                words = outcome.words
                keystack.insert(0, outcome.link)
                links += 1
            # Action.NEWKEY: carry on down the keystack

        # the NONE rule always has something to say
        outcome = apply_transformation(rules[NONE_KEYWORD], words,
                                       self.script.tags, self.cursors)
        if outcome.action is Action.COMPLETE:
            words = outcome.words
        tracer.using_none()
        return join(words)

    def _scan(self, words) -> list[str]:
        """Build the keystack from words, trimming them to one clause.

        Substitutions are applied to words in place.
        """
        rules = self.script.rules
        keystack: list[str] = []
        top = 0
        i = 0
        while i < len(words):
            word = words[i]
            if is_delimiter(word):
                if not keystack:
                    # nothing yet: drop this clause and keep scanning
                    del words[:i + 1]
                    i = 0
                    continue
                # keep only the first clause containing a keyword
                del words[i:]
                break

            rule = rules.get(word)
            if rule is not None:
                if rule.has_transformation():
                    if rule.precedence > top:
                        keystack.insert(0, word)
                        top = rule.precedence
                    else:
                        keystack.append(word)
                words[i] = rule.substitute(word)
            i += 1
        return keystack

    def _lay_down_memory(self, keyword, words) -> list[str]:
        try:
            trace = self.memory.create(keyword, words, self.script.tags)
        except ValueError as e:
            # the last word came from the script and has no Hollerith code
            log.debug("Memory not created: %s", e)
            return []
        if trace:
            log.debug("Memory queued (%d pending)", len(self.memory))
        return trace

    # -- persistence -------------------------------------------------------

    def snapshot(self) -> dict:
        """Plain-data copy of the conversation state.

        Holds only ints, strings and lists so it can be stored with any
        serializer. Tied to the script by its fingerprint.
        """
        return {
            "version": SNAPSHOT_VERSION,
            "script": self.script.fingerprint(),
            "limit": self.limit,
            "memories": self.memory.pending(),
            "cursors": [[keyword, index, position]
                        for (keyword, index), position in sorted(self.cursors.items())],
        }

    def restore(self, snapshot: dict):
        """Continue the conversation recorded in snapshot.

        Raises ValueError if the snapshot belongs to another script or
        another snapshot format.
        """
        version = snapshot.get("version")
        if version != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported session snapshot version: {version}")
        if snapshot.get("script") != self.script.fingerprint():
            raise ValueError("Session snapshot was taken with a different script")
        limit = snapshot["limit"]
        if not 1 <= limit <= 4:
            raise ValueError(f"Conversation counter must be 1-4, got {limit}")

        cursors = {}
        rules = self.script.rules
        for keyword, index, position in snapshot["cursors"]:
            rule = rules.get(keyword)
            if rule is None or not 0 <= index < len(rule.transforms):
                raise ValueError(f"Snapshot cursor {keyword}/{index} not in script")
            count = len(rule.transforms[index].reassemblies)
            if not 0 <= position < count:
                raise ValueError(f"Snapshot cursor {keyword}/{index} must be 0-{count - 1}, got {position}")
            cursors[(keyword, index)] = position

        self.limit = limit
        self.memory = Memory(self.script.memory, snapshot["memories"])
        self.cursors = cursors
