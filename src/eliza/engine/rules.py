"""Script rules — the six rule forms and their transformations.

A script maps keywords to rules. Every rule belongs to exactly one kind,
fixed when the script is read:

    VANILLA        decomposition/reassembly transforms, optional (=LINK) fallback
    SUBSTITUTION   (DONT = DON'T)  word substitution only
    TAGGED         (FATHER DLIST(/NOUN FAMILY))  contributes to the tag index
    LINK           (HOW (=WHAT))  always defers to another keyword
    PRE            (YOU'RE = I'M ((0 I'M 0) (PRE (I ARE 3) (=YOU))))
    MEMORY         (MEMORY MY (0 YOUR 0 = ...) x4)  never dispatched by keyword

Rules are immutable once loaded. The round-robin position of each
transform's reassembly list lives in a cursor table owned by the caller,
keyed by (keyword, transform index), so one loaded script can serve many
conversations.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .match import match
from .reassemble import reassemble
from .tokenizer import join


# The NONE rule lives under a key no uppercased input word can equal
NONE_KEYWORD = "zNONE"
# The MEMORY rule must have exactly this number of transformations
MEMORY_TRANSFORMS = 4


class RuleKind(Enum):
    VANILLA = "vanilla"
    SUBSTITUTION = "substitution"
    TAGGED = "tagged"
    LINK = "link"
    PRE = "pre"
    MEMORY = "memory"


class ReassemblyKind(Enum):
    TEXT = "text"        # (WHY DO YOU SAY YOUR 3)
    NEWKEY = "newkey"    # (NEWKEY)
    LINK = "link"        # (=WHAT)
    PRE = "pre"          # (PRE (I ARE 3) (=YOU))


class Action(Enum):
    INAPPLICABLE = "inapplicable"   # no transformation could be performed
    COMPLETE = "complete"           # transformation of input is complete
    NEWKEY = "newkey"               # try the next keyword on the keystack
    LINKKEY = "linkkey"             # try the returned keyword


@dataclass(frozen=True)
class Reassembly:
    """One reassembly rule of a transform."""
    kind: ReassemblyKind
    words: tuple[str, ...]
    link: str = ""

    @classmethod
    def from_terms(cls, terms) -> Reassembly:
        """Classify a bracketed reassembly list as read from a script."""
        terms = tuple(terms)
        if len(terms) == 1 and terms[0] == "NEWKEY":
            return cls(ReassemblyKind.NEWKEY, terms)
        if len(terms) == 1 and len(terms[0]) > 1 and terms[0].startswith("="):
            return cls(ReassemblyKind.LINK, terms, terms[0][1:])
        return cls(ReassemblyKind.TEXT, terms)

    @classmethod
    def pre(cls, terms, link: str) -> Reassembly:
        return cls(ReassemblyKind.PRE, tuple(terms), link)


@dataclass(frozen=True)
class Transform:
    """A decomposition pattern and its reassembly rules, used in turn."""
    decomposition: tuple[str, ...]
    reassemblies: tuple[Reassembly, ...]


@dataclass(frozen=True)
class Rule:
    keyword: str
    kind: RuleKind
    substitution: str = ""
    precedence: int = 0
    tags: tuple[str, ...] = ()
    transforms: tuple[Transform, ...] = ()
    link: str = ""

    @classmethod
    def keyword_rule(cls, keyword, substitution="", precedence=0, tags=(),
                     transforms=(), link="") -> Rule:
        """Build a keyword rule, deciding its kind from what it carries."""
        transforms = tuple(transforms)
        if transforms:
            only = transforms[0].reassemblies
            if (len(transforms) == 1 and len(only) == 1
                    and only[0].kind is ReassemblyKind.PRE):
                kind = RuleKind.PRE
            else:
                kind = RuleKind.VANILLA
        elif link:
            kind = RuleKind.LINK
        elif tags:
            kind = RuleKind.TAGGED
        else:
            kind = RuleKind.SUBSTITUTION
        return cls(keyword, kind, substitution, precedence, tuple(tags),
                   transforms, link)

    @classmethod
    def memory_rule(cls, keyword, transforms) -> Rule:
        return cls(keyword, RuleKind.MEMORY, transforms=tuple(transforms))

    def has_transformation(self) -> bool:
        """True iff this rule can act on a whole sentence (keystack candidate)."""
        return bool(self.transforms) or bool(self.link)

    def substitute(self, word: str) -> str:
        """Return the substitute for word if it is this rule's keyword."""
        if self.substitution and word == self.keyword:
            return self.substitution
        return word


@dataclass
class Outcome:
    """Result of applying one rule to the current words."""
    action: Action
    words: list[str]
    link: str = ""
    trace: list[str] = field(default_factory=list)


def apply_transformation(rule, words, tags, cursors) -> Outcome:
    """Apply rule to words.

    Args:
        rule: Rule taken from the keystack
        words: Current word list (not modified)
        tags: Tag index from collect_tags()
        cursors: dict (keyword, transform index) -> next reassembly index;
                 advanced in place for the transform used

    Returns:
        Outcome with the action for the dispatcher, the (possibly new)
        word list, the link keyword for LINKKEY, and trace lines.
    """
    trace = [f"    keyword: {rule.keyword}", f"    input: {join(words)}"]

    if rule.kind is RuleKind.LINK:
        trace.append(f"    reference to equivalence class: {rule.link}")
        return Outcome(Action.LINKKEY, words, rule.link, trace)

    if rule.kind in (RuleKind.SUBSTITUTION, RuleKind.TAGGED, RuleKind.MEMORY):
        trace.append("    ill-formed script: no decomposition rule matches")
        return Outcome(Action.INAPPLICABLE, words, trace=trace)

    # VANILLA and PRE: first decomposition that matches wins
    for index, transform in enumerate(rule.transforms):
        components = match(tags, transform.decomposition, words)
        if components is not None:
            break
    else:
        if rule.link:
            trace.append(f"    reference to equivalence class: {rule.link}")
            return Outcome(Action.LINKKEY, words, rule.link, trace)
        trace.append("    ill-formed script: no decomposition rule matches")
        return Outcome(Action.INAPPLICABLE, words, trace=trace)

    trace.append(f"    matching decomposition: {join(transform.decomposition)}")

    key = (rule.keyword, index)
    position = cursors.get(key, 0)
    reassembly = transform.reassemblies[position]
    cursors[key] = (position + 1) % len(transform.reassemblies)
    trace.append(f"      matching reassembly: {render_reassembly(reassembly)}")

    if reassembly.kind is ReassemblyKind.NEWKEY:
        return Outcome(Action.NEWKEY, words, trace=trace)
    if reassembly.kind is ReassemblyKind.LINK:
        return Outcome(Action.LINKKEY, words, reassembly.link, trace)
    if reassembly.kind is ReassemblyKind.PRE:
        return Outcome(Action.LINKKEY, reassemble(reassembly.words, components),
                       reassembly.link, trace)
    return Outcome(Action.COMPLETE, reassemble(reassembly.words, components),
                   trace=trace)


def render_reassembly(reassembly) -> str:
    """Reassembly rule in script-like form, brackets omitted except for PRE."""
    if reassembly.kind is ReassemblyKind.PRE:
        return f"( PRE ( {join(reassembly.words)} ) ( ={reassembly.link} ) )"
    return join(reassembly.words)


def collect_tags(rules) -> dict[str, list[str]]:
    """Build the tag index from every rule's DLIST.

    e.g. tags["BELIEF"] -> ["BELIEVE", "FEEL", "THINK", "WISH"]

    Rules are visited in keyword order, so members are listed in that
    order too. A bare "/" is ignored; a leading "/" is stripped.
    """
    tags: dict[str, list[str]] = {}
    for keyword in sorted(rules):
        rule = rules[keyword]
        for tag in rule.tags:
            if tag == "/":
                continue
            if len(tag) > 1 and tag.startswith("/"):
                tag = tag[1:]
            tags.setdefault(tag, []).append(rule.keyword)
    return tags
