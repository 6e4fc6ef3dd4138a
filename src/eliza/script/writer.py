"""Script writer — a loaded Script back to canonical script text.

Rules are written in keyword order, followed by the
MEMORY rule. Comments, START and layout of the source are not kept, so
the output is the same for any two texts that load to the same script.
"""

from eliza.engine.rules import NONE_KEYWORD, ReassemblyKind, render_reassembly
from eliza.engine.tokenizer import join


def rule_to_sexp(rule) -> str:
    """e.g. (K13 = SUBSTITUTEWORD (=REFERENCE))"""
    sexp = "(" + ("NONE" if rule.keyword == NONE_KEYWORD else rule.keyword)
    if rule.substitution:
        sexp += " = " + rule.substitution
    if rule.tags:
        sexp += " DLIST(" + join(rule.tags) + ")"
    if rule.precedence > 0:
        sexp += f" {rule.precedence}"

    for transform in rule.transforms:
        sexp += "\n    ((" + join(transform.decomposition) + ")"
        for reassembly in transform.reassemblies:
            if reassembly.kind is ReassemblyKind.PRE:
                sexp += "\n        " + render_reassembly(reassembly)
            else:
                sexp += "\n        (" + join(reassembly.words) + ")"
        sexp += ")"

    if rule.link:
        if rule.transforms:
            sexp += "\n   "
        sexp += " (=" + rule.link + ")"
    return sexp + ")\n"


def memory_to_sexp(rule) -> str:
    sexp = "(MEMORY " + rule.keyword
    for transform in rule.transforms:
        sexp += "\n    (" + join(transform.decomposition)
        sexp += " = " + join(transform.reassemblies[0].words) + ")"
    return sexp + ")\n"


def to_sexp(script) -> str:
    """Render script as text that loads back to an equivalent script."""
    parts = ["(" + join(script.greeting) + ")\n"]
    for keyword in sorted(script.rules):
        parts.append(rule_to_sexp(script.rules[keyword]))
    parts.append(memory_to_sexp(script.memory))
    return "".join(parts)
