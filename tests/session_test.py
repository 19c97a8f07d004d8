import io

import pytest

from errors import NameResolutionError, PaaniniSyntaxError, SessionClosedError
from session import Session


def make_session(**kwargs):
    out, err = io.StringIO(), io.StringIO()
    return Session(out=out, err=err, **kwargs), out, err


def test_state_persists_across_inputs():
    session, out, _ = make_session()
    assert session.feed("x = 5") is False
    assert session.feed("darsh(x)") is False
    assert out.getvalue() == "5\n"


def test_block_is_held_until_blank_line():
    session, out, _ = make_session()
    assert session.feed("x = 5") is False
    assert session.feed("yadi (x < 10):") is True
    assert session.feed('    darsh("small")') is True
    assert session.feed("anyatha:") is True
    assert session.feed('    darsh("big")') is True
    assert out.getvalue() == ""
    assert session.feed("") is False
    assert out.getvalue() == "small\n"


def test_dedent_to_top_level_dispatches_previous_block():
    session, out, _ = make_session()
    session.feed("paribhraman i in paridhi(2):")
    session.feed("  darsh(i)")
    assert session.feed("darsh(10)") is False
    assert out.getvalue() == "0\n1\n10\n"


def test_nested_blocks_wait_for_nesting_to_return_to_zero():
    session, out, _ = make_session()
    session.feed("karya f(n):")
    session.feed("  yadi (n > 1):")
    session.feed("    darsh(n)")
    assert session.feed("  darsh(0)") is True
    assert out.getvalue() == ""
    assert session.feed("f(2)") is False
    assert out.getvalue() == "2\n0\n"


def test_errors_are_reported_and_state_is_kept():
    session, out, err = make_session()
    session.feed("x = 1")
    session.feed("darsh(y)")
    assert "Name error" in err.getvalue()
    assert "'y'" in err.getvalue()
    session.feed("darsh(x)")
    assert out.getvalue() == "1\n"


def test_loop_limit_fails_only_that_statement():
    session, out, err = make_session(max_loop_iterations=5)
    session.feed("i = 0")
    session.feed("yavat (i < 100):")
    session.feed("    i = i + 1")
    session.feed("")
    assert "Loop limit exceeded" in err.getvalue()
    session.feed("darsh(i)")
    assert out.getvalue() == "5\n"


def test_indentation_mismatch_is_a_diagnostic():
    session, out, err = make_session()
    session.feed("yadi (1 < 2):")
    session.feed("    darsh(1)")
    assert session.feed("   darsh(2)") is False
    assert "Indentation mismatch" in err.getvalue()
    assert out.getvalue() == ""
    assert session.buffer == []


def test_help_bypasses_the_pipeline():
    session, out, err = make_session()
    assert session.feed("help") is False
    assert session.feed("  सहायता  ") is False
    assert out.getvalue().count("Paanini commands") == 2
    assert err.getvalue() == ""


def test_comments_and_blank_lines_are_ignored_at_top_level():
    session, out, err = make_session()
    assert session.feed("") is False
    assert session.feed("!! a comment") is False
    assert session.feed("# another") is False
    assert out.getvalue() == "" and err.getvalue() == ""


def test_flush_runs_buffered_block():
    session, out, _ = make_session()
    session.feed("yavat (1 > 2):")
    session.feed("  darsh(1)")
    assert session.flush() is True
    assert session.buffer == []


def test_sessions_are_independent():
    first, out1, _ = make_session()
    second, _, err2 = make_session()
    first.feed("x = 1")
    second.feed("darsh(x)")
    assert "Name error" in err2.getvalue()
    first.feed("darsh(x)")
    assert out1.getvalue() == "1\n"


def test_one_shot_run_stops_at_first_error():
    session, out, _ = make_session()
    with pytest.raises(NameResolutionError):
        session.run_source("darsh(1)\ndarsh(y)\ndarsh(2)\n")
    assert out.getvalue() == "1\n"


def test_syntax_error_stops_whole_unit_before_running():
    session, out, _ = make_session()
    with pytest.raises(PaaniniSyntaxError):
        session.run_source("darsh(1)\nx = = 2\n")
    assert out.getvalue() == ""


def test_run_snippet_collects_output_and_errors():
    session, out, _ = make_session()
    first = session.run_snippet('x = "नमस्ते"\ndarsh(x)\n')
    assert first.output == "नमस्ते\n"
    assert first.errors == []

    second = session.run_snippet("darsh(x + 1)\ndarsh(missing)\n")
    assert second.output == "नमस्ते1\n"
    assert len(second.errors) == 1 and "missing" in second.errors[0]
    assert out.getvalue() == ""


def test_closing_clears_state_and_rejects_input():
    with Session(out=io.StringIO()) as session:
        session.feed("x = 1")
        env = session.env
    assert session.closed
    assert "x" not in env
    with pytest.raises(SessionClosedError):
        session.feed("darsh(1)")


def test_runaway_recursion_keeps_the_session_alive():
    session, out, err = make_session()
    session.feed("x = 1")
    for line in (
        "karya f(n):",
        "  yadi (n >= 0):",
        "    yavat (n < 1000000):",
        "      yadi (n >= 0):",
        "        yadi (n >= 0):",
        "          yadi (n >= 0):",
        "            f(n + 1)",
        "",
    ):
        session.feed(line)
    assert session.feed("f(0)") is False
    assert "call depth" in err.getvalue()
    session.feed("darsh(x)")
    assert out.getvalue() == "1\n"


def test_long_addition_chain_through_feed():
    session, out, err = make_session()
    session.feed("x = " + " + ".join(["1"] * 3000))
    session.feed("darsh(x)")
    assert err.getvalue() == ""
    assert out.getvalue() == "3000\n"


def test_inline_if_is_held_for_its_else():
    session, out, err = make_session()
    session.feed("x = 20")
    assert session.feed('yadi (x < 10): darsh("small")') is True
    assert session.feed('anyatha: darsh("big")') is False
    assert out.getvalue() == "big\n"
    assert err.getvalue() == ""


def test_inline_if_without_else_runs_before_next_statement():
    session, out, _ = make_session()
    assert session.feed('yadi (1 < 2): darsh("a")') is True
    assert out.getvalue() == ""
    assert session.feed("darsh(1)") is False
    assert out.getvalue() == "a\n1\n"


def test_inline_if_followed_by_else_block():
    session, out, _ = make_session()
    session.feed('yadi (2 < 1): darsh("a")')
    assert session.feed("anyatha:") is True
    assert session.feed('  darsh("b")') is True
    assert session.feed("") is False
    assert out.getvalue() == "b\n"
