#!/usr/bin/env python3
"""ELIZA — talk to the 1966 DOCTOR script from a terminal.

Usage:
    eliza [options]

Options:
    --script FILE       Use a script file instead of the built-in DOCTOR script
    --showscript        Print the script (DOCTOR, or the one named by --script)
    --nobanner          Don't display the startup banner
    --notty             Don't print at teletype speed (15 characters per second)
    --session NAME      Resume the conversation saved as NAME; save it on exit
    --store DIR         LMDB directory for saved sessions
    --nomatch-none      Answer script errors from NONE instead of fixed phrases
    --debug             Log engine internals to stderr

In a conversation these inputs have special meaning:
    <blank line>    quit
    *               display trace of the most recent exchange
    *traceoff       turn off tracing
    *traceon        turn on tracing; enter '*' after any exchange to see trace
    *traceauto      turn on tracing; trace shown after every exchange
    *tracepre       show input sentence prior to applying each transformation
    *save           save the conversation now (needs --session)

Environment:
    ELIZA_SCRIPT        Default script file (default: built-in DOCTOR)
    ELIZA_SESSION_DB    Default session store (default: ~/.eliza/sessions)
"""

import argparse
import logging
import os
import sys
import time

from eliza.engine.session import Eliza
from eliza.engine.trace import PreTracer, TextTracer, Tracer
from eliza.script.doctor import CACM_1966_01_DOCTOR_SCRIPT
from eliza.script.loader import load, load_file
from eliza.script.writer import to_sexp

DEFAULT_SCRIPT = os.environ.get("ELIZA_SCRIPT", "")
DEFAULT_STORE = os.environ.get(
    "ELIZA_SESSION_DB", os.path.join(os.path.expanduser("~"), ".eliza", "sessions"))

TELETYPE_CPS = 15

BANNER = """\
-----------------------------------------------------------------
      ELIZA -- A Computer Program for the Study of Natural
         Language Communication Between Man and Machine
DOCTOR script by Joseph Weizenbaum, 1966  (CC0 1.0) Public Domain
-----------------------------------------------------------------
ELIZA --help for usage.
Enter a blank line to quit."""


def teletype(text, out=None, cps=TELETYPE_CPS):
    """Write one line a character at a time, like a 1966 terminal."""
    out = out or sys.stdout
    for ch in text:
        out.write(ch)
        out.flush()
        time.sleep(1.0 / cps)
    out.write("\n")
    out.flush()


def load_script(args):
    if args.script:
        return load_file(args.script)
    return load(CACM_1966_01_DOCTOR_SCRIPT)


def cmd_showscript(args):
    if args.script:
        print(to_sexp(load_file(args.script)), end="")
    else:
        print(CACM_1966_01_DOCTOR_SCRIPT, end="")


def converse(eliza, notty=False, store=None, session_name=None):
    """Read lines from stdin and answer them until a blank line or EOF."""
    trace = TextTracer()
    pre = PreTracer()
    eliza.set_tracer(trace)
    traceauto = False

    def say(text):
        if notty:
            print(text, flush=True)
        else:
            teletype(text)

    say(eliza.greeting)
    while True:
        print()
        line = sys.stdin.readline()
        if not line:
            break
        line = line.rstrip("\r\n")
        if not line:
            break

        command = line.upper()
        if line == "*":
            print(trace.text(), end="")
            continue
        if command == "*TRACEON":
            eliza.set_tracer(trace)
            traceauto = False
            print("tracing enabled; enter '*' after any exchange to see trace")
            continue
        if command == "*TRACEAUTO":
            eliza.set_tracer(trace)
            traceauto = True
            print("tracing enabled")
            continue
        if command == "*TRACEOFF":
            eliza.set_tracer(Tracer())
            trace.clear()
            traceauto = False
            print("tracing disabled")
            continue
        if command == "*TRACEPRE":
            eliza.set_tracer(pre)
            trace.clear()
            traceauto = False
            print("tracing PRE enabled")
            continue
        if command == "*SAVE":
            if store is None:
                print("no session to save; start ELIZA with --session NAME")
            else:
                store.save(session_name, eliza)
                print(f"session '{session_name}' saved")
            continue

        say(eliza.respond(line))
        if traceauto:
            print(trace.text(), end="")


def cmd_converse(args):
    script = load_script(args)

    if not args.nobanner:
        print(BANNER)
        if args.script:
            print(f"Using script file '{args.script}'\n\n")
        else:
            print("No script filename given; using built-in 1966 DOCTOR script.\n\n")
    else:
        print("\n")

    eliza = Eliza(script, use_nomatch_messages=not args.nomatch_none)

    if not args.session:
        converse(eliza, notty=args.notty)
        return

    from eliza.cache.sessions import SessionStore

    os.makedirs(args.store, exist_ok=True)
    with SessionStore(args.store) as store:
        if store.restore(args.session, eliza):
            print(f"(resuming session '{args.session}')\n")
        converse(eliza, notty=args.notty, store=store, session_name=args.session)
        store.save(args.session, eliza)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="eliza",
        description="ELIZA — Weizenbaum's 1966 conversation program",
    )
    parser.add_argument("--script", default=DEFAULT_SCRIPT,
                        help="Script file (default: built-in 1966 DOCTOR script)")
    parser.add_argument("--showscript", action="store_true",
                        help="Print the script and exit (e.g. eliza --showscript > script.txt)")
    parser.add_argument("--nobanner", action="store_true",
                        help="Don't display startup banner")
    parser.add_argument("--notty", action="store_true",
                        help="Don't print like it's 1966 (at 15 characters per second)")
    parser.add_argument("--session", help="Name of a conversation to resume and save")
    parser.add_argument("--store", default=DEFAULT_STORE,
                        help="Session store directory (LMDB)")
    parser.add_argument("--nomatch-none", action="store_true",
                        help="Use NONE messages instead of built-in error phrases")
    parser.add_argument("--debug", action="store_true", help="Log engine internals")

    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
            stream=sys.stderr,
        )

    try:
        if args.showscript:
            cmd_showscript(args)
        else:
            cmd_converse(args)
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
