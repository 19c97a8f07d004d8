import os
import subprocess
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def run_cli(*args):
    return subprocess.run(
        [sys.executable, os.path.join(ROOT, "cli.py"), *args],
        text=True,
        encoding="utf-8",
        capture_output=True,
        cwd=ROOT,
        timeout=20,
        env={**os.environ, "PYTHONIOENCODING": "utf-8"},
    )


def write_program(tmp_path, source):
    path = tmp_path / "prog.pan"
    path.write_text(source, encoding="utf-8")
    return str(path)


def test_run_prints_program_output(tmp_path):
    path = write_program(tmp_path, 'नाम = "विश्व"\nदर्श("नमस्ते " + नाम)\nparibhraman i in paridhi(2):\n  darsh(i)\n')
    proc = run_cli("run", path)
    if proc.returncode != 0:
        raise AssertionError(f"run failed\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}")
    assert proc.stdout == "नमस्ते विश्व\n0\n1\n"


def test_run_reports_first_error_and_fails(tmp_path):
    path = write_program(tmp_path, "darsh(1)\ndarsh(y)\ndarsh(2)\n")
    proc = run_cli("run", path)
    assert proc.returncode == 1
    assert proc.stdout.startswith("1\n")
    assert "त्रुटिः Name error" in proc.stdout
    assert "2\n" not in proc.stdout.splitlines(keepends=True)[1:]


def test_missing_file_fails(tmp_path):
    proc = run_cli("run", str(tmp_path / "nope.pan"))
    assert proc.returncode == 1


def test_parse_prints_tree(tmp_path):
    path = write_program(tmp_path, "x = 1 + 2\n")
    proc = run_cli("parse", path)
    assert proc.returncode == 0
    assert "type: Program" in proc.stdout
    assert "Assignment" in proc.stdout


def test_example_program_runs(tmp_path):
    example = run_cli("example")
    assert example.returncode == 0
    proc = run_cli("run", write_program(tmp_path, example.stdout))
    if proc.returncode != 0:
        raise AssertionError(f"example failed\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}")


def test_version_and_usage():
    assert "Paanini" in run_cli("--version").stdout
    assert run_cli().returncode == 1
