"""Tests for the eliza command line."""
import io

import pytest

from eliza import cli
from eliza.cache.sessions import SessionStore
from eliza.script.doctor import CACM_1966_01_DOCTOR_SCRIPT
from eliza.script.loader import load
from eliza.script.writer import to_sexp


def run(monkeypatch, capsys, argv, lines):
    monkeypatch.setattr("sys.stdin", io.StringIO("".join(line + "\n" for line in lines)))
    code = cli.main(argv)
    captured = capsys.readouterr()
    return code, captured.out, captured.err


class TestShowScript:
    def test_builtin(self, capsys):
        assert cli.main(["--showscript"]) == 0
        assert capsys.readouterr().out == CACM_1966_01_DOCTOR_SCRIPT

    def test_script_file(self, capsys, tmp_path):
        path = tmp_path / "doctor.txt"
        path.write_text(CACM_1966_01_DOCTOR_SCRIPT)
        assert cli.main(["--showscript", "--script", str(path)]) == 0
        assert capsys.readouterr().out == to_sexp(load(CACM_1966_01_DOCTOR_SCRIPT))


class TestConversation:
    def test_conversation(self, monkeypatch, capsys):
        code, out, _ = run(monkeypatch, capsys, ["--notty", "--nobanner"],
                           ["Men are all alike.", "They're always bugging us about something or other."])
        assert code == 0
        assert "HOW DO YOU DO. PLEASE TELL ME YOUR PROBLEM\n" in out
        assert "IN WHAT WAY\n" in out
        assert "CAN YOU THINK OF A SPECIFIC EXAMPLE\n" in out

    def test_blank_line_quits(self, monkeypatch, capsys):
        _, out, _ = run(monkeypatch, capsys, ["--notty", "--nobanner"],
                        ["", "Men are all alike."])
        assert "IN WHAT WAY" not in out

    def test_banner(self, monkeypatch, capsys):
        _, out, _ = run(monkeypatch, capsys, ["--notty"], [])
        assert "ELIZA -- A Computer Program" in out
        assert "using built-in 1966 DOCTOR script" in out

    def test_teletype(self, monkeypatch, capsys):
        delays = []
        monkeypatch.setattr(cli.time, "sleep", delays.append)
        _, out, _ = run(monkeypatch, capsys, ["--nobanner"], ["Men are all alike."])
        assert "IN WHAT WAY\n" in out
        assert len(delays) == len("HOW DO YOU DO. PLEASE TELL ME YOUR PROBLEM") + len("IN WHAT WAY")
        assert delays[0] == pytest.approx(1 / 15)

    def test_nomatch_none(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "tiny.txt"
        path.write_text("(HI)\n(K ((ZZZ) (NEVER)))\n(NONE ((0) (GO ON)))\n"
                        "(MY ((0) (A)))\n(MEMORY MY (0 = A) (0 = B) (0 = C) (0 = D))\n")
        _, out, _ = run(monkeypatch, capsys,
                        ["--notty", "--nobanner", "--script", str(path)], ["K"])
        assert "HMMM" in out
        _, out, _ = run(monkeypatch, capsys,
                        ["--notty", "--nobanner", "--nomatch-none", "--script", str(path)], ["K"])
        assert "GO ON" in out


class TestTraceCommands:
    def test_star_shows_last_trace(self, monkeypatch, capsys):
        _, out, _ = run(monkeypatch, capsys, ["--notty", "--nobanner"],
                        ["Men are all alike.", "*"])
        assert "  keyword stack: ALIKE(10), ARE(0)" in out

    def test_traceauto(self, monkeypatch, capsys):
        _, out, _ = run(monkeypatch, capsys, ["--notty", "--nobanner"],
                        ["*traceauto", "Men are all alike."])
        assert "tracing enabled\n" in out
        assert "  LIMIT: 2" in out

    def test_traceoff(self, monkeypatch, capsys):
        _, out, _ = run(monkeypatch, capsys, ["--notty", "--nobanner"],
                        ["*traceoff", "Men are all alike.", "*"])
        assert "tracing disabled" in out
        assert "LIMIT" not in out

    def test_tracepre(self, monkeypatch, capsys):
        _, out, _ = run(monkeypatch, capsys, ["--notty", "--nobanner"],
                        ["*TRACEPRE", "Men are all alike."])
        assert "MEN ARE ALL ALIKE   :ALIKE" in out
        assert "MEN ARE ALL ALIKE   :DIT" in out

    def test_save_without_session(self, monkeypatch, capsys):
        _, out, _ = run(monkeypatch, capsys, ["--notty", "--nobanner"], ["*save"])
        assert "no session to save" in out


@pytest.mark.lmdb
class TestSessions:
    def test_session_saved_and_resumed(self, monkeypatch, capsys, tmp_path):
        store_dir = tmp_path / "store"
        argv = ["--notty", "--nobanner", "--session", "alice", "--store", str(store_dir)]

        run(monkeypatch, capsys, argv, ["Well, my boyfriend made me come here."])
        with SessionStore(store_dir) as store:
            assert store.names() == ["alice"]
            assert len(store.load("alice")["memories"]) == 1

        _, out, _ = run(monkeypatch, capsys, argv, ["Hello there", "Bullies."])
        assert "(resuming session 'alice')" in out

    def test_save_command(self, monkeypatch, capsys, tmp_path):
        store_dir = tmp_path / "store"
        _, out, _ = run(monkeypatch, capsys,
                        ["--notty", "--nobanner", "--session", "bob", "--store", str(store_dir)],
                        ["*save"])
        assert "session 'bob' saved" in out


class TestErrors:
    def test_missing_script(self, capsys, tmp_path):
        assert cli.main(["--script", str(tmp_path / "absent.txt")]) == 1
        assert capsys.readouterr().err.startswith("ERROR: ")

    def test_bad_script(self, capsys, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("(HELLO)\n(K FOO)\n")
        assert cli.main(["--showscript", "--script", str(path)]) == 1
        assert "Script error on line 2: malformed rule" in capsys.readouterr().err

    def test_session_for_other_script(self, monkeypatch, capsys, tmp_path):
        store_dir = tmp_path / "store"
        argv = ["--notty", "--nobanner", "--session", "alice", "--store", str(store_dir)]
        run(monkeypatch, capsys, argv, ["Men are all alike."])

        path = tmp_path / "tiny.txt"
        path.write_text("(HI)\n(NONE ((0) (GO ON)))\n"
                        "(MY ((0) (A)))\n(MEMORY MY (0 = A) (0 = B) (0 = C) (0 = D))\n")
        code, _, err = run(monkeypatch, capsys, argv + ["--script", str(path)], [])
        assert code == 1
        assert "different script" in err
