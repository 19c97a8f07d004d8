import os
import subprocess
import sys


def run_repl_with_input(inp: str) -> str:
    root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    cli = os.path.join(root, "cli.py")

    proc = subprocess.run(
        [sys.executable, cli, "repl"],
        input=inp,
        text=True,
        encoding="utf-8",
        capture_output=True,
        cwd=root,
        timeout=20,
        env={**os.environ, "PYTHONIOENCODING": "utf-8"},
    )

    # REPL should exit cleanly after exit
    if proc.returncode != 0:
        raise AssertionError(f"REPL exited with code {proc.returncode}\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}")

    return proc.stdout


def test_persistent_state_across_inputs():
    out = run_repl_with_input("x = 5\ndarsh(x)\nexit\n")
    if "5" not in out:
        raise AssertionError(f"Expected 5 in output.\nOUT:\n{out}")


def test_block_waits_for_blank_line():
    out = run_repl_with_input('यदि (1 < 2):\n    दर्श("हाँ")\n\nexit\n')
    if "हाँ" not in out:
        raise AssertionError(f"Expected block output.\nOUT:\n{out}")


def test_error_does_not_end_session():
    out = run_repl_with_input("x = 2\ndarsh(nope)\ndarsh(x + 1)\nexit\n")
    if "Name error" not in out or "nope" not in out:
        raise AssertionError(f"Expected a name error for nope.\nOUT:\n{out}")
    if "3" not in out:
        raise AssertionError(f"Expected 3 after the error.\nOUT:\n{out}")


def test_help_meta_command():
    out = run_repl_with_input("help\nexit\n")
    if "Paanini commands" not in out:
        raise AssertionError(f"Expected help text.\nOUT:\n{out}")


def test_clear_redraws_banner_and_keeps_state():
    out = run_repl_with_input("x = 4\nclear\nस्पष्ट\ndarsh(x)\nexit\n")
    if out.count("Paanini REPL") != 3:
        raise AssertionError(f"Expected the banner after each clear.\nOUT:\n{out}")
    if "4" not in out:
        raise AssertionError(f"Expected x to survive clear.\nOUT:\n{out}")


def test_inline_if_waits_for_its_else():
    out = run_repl_with_input('x = 20\nyadi (x < 10): darsh("small")\nanyatha: darsh("big")\nexit\n')
    if "big" not in out or "Syntax error" in out:
        raise AssertionError(f"Expected the else branch.\nOUT:\n{out}")


def test_end_of_input_flushes_open_block():
    out = run_repl_with_input("paribhraman i in paridhi(2):\n    darsh(i)\n")
    if "0" not in out or "1" not in out:
        raise AssertionError(f"Expected loop output.\nOUT:\n{out}")


if __name__ == "__main__":
    test_persistent_state_across_inputs()
    test_block_waits_for_blank_line()
    test_error_does_not_end_session()
    test_help_meta_command()
    test_clear_redraws_banner_and_keeps_state()
    test_inline_if_waits_for_its_else()
    test_end_of_input_flushes_open_block()
    print("ok")
