"""Integration tests for the command-line interface.

These tests run ``fuse`` in a subprocess and cover:
- Gitignore and custom ignore patterns
- Output formats and the table of contents
- Paths read from stdin
- Output file verification
- Exit codes for usage and runtime errors
- Broken pipe handling
"""

import os
import platform
import subprocess
import sys

import pytest

from filefuse import __version__

# Subprocess tests are slow; they only run with --run-cli-tests
pytestmark = pytest.mark.skipif(
    "not config.getoption('--run-cli-tests')", reason="Only run when --run-cli-tests is given"
)


@pytest.fixture
def temp_project(tmp_path):
    """Create a temporary project directory with test files."""
    base_dir = tmp_path / "proj"
    (base_dir / "src" / "utils").mkdir(parents=True)
    (base_dir / "docs").mkdir()
    (base_dir / "build").mkdir()

    (base_dir / "src" / "main.py").write_text("def main():\n    print('Hello')\n")
    (base_dir / "src" / "utils" / "helpers.py").write_text("def helper():\n    pass\n")
    (base_dir / "docs" / "README.md").write_text("# Test Project\nDescription.\n")
    (base_dir / "src" / "main.pyc").write_bytes(b"\x00compiled python")
    (base_dir / "server.log").write_text("DEBUG: test log\n")
    (base_dir / "build" / "output.min.js").write_text("console.log('test')\n")
    (base_dir / ".gitignore").write_text("*.pyc\nbuild/\n")

    return base_dir


def run_fuse(*args, input=None, cwd=None):
    """Run fuse as a module and capture its output."""
    return subprocess.run(
        [sys.executable, "-m", "filefuse.cli.main", *args],
        input=input,
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=cwd,
    )


def test_no_arguments_prints_help():
    result = run_fuse()
    assert result.returncode == 0
    assert "Turn many files -> single file" in result.stdout


def test_version():
    result = run_fuse("--version")
    assert result.returncode == 0
    assert result.stdout.strip() == f"fuse {__version__}"


def test_gitignore_is_respected(temp_project):
    result = run_fuse(".", cwd=temp_project)
    assert result.returncode == 0
    assert "src/main.py\n---\n" in result.stdout
    assert "server.log" in result.stdout
    assert "main.pyc" not in result.stdout
    assert "output.min.js" not in result.stdout
    assert ".gitignore" not in result.stdout


def test_ignore_gitignore(temp_project):
    result = run_fuse(".", "--ignore-gitignore", cwd=temp_project)
    assert result.returncode == 0
    assert "build/output.min.js" in result.stdout
    # Still skipped, as binary content
    assert "main.pyc\n---" not in result.stdout


def test_custom_ignore_patterns(temp_project):
    result = run_fuse(".", "--ignore", "*.log", "--ignore", "docs/", cwd=temp_project)
    assert result.returncode == 0
    assert "server.log" not in result.stdout
    assert "README.md" not in result.stdout
    assert "helpers.py" in result.stdout


def test_xml_with_toc(temp_project):
    result = run_fuse(".", "-c", "--toc-files", "-e", "py", cwd=temp_project)
    assert result.returncode == 0
    expected_toc = (
        "<table_of_contents>\n"
        "└── proj/\n"
        "    ├── docs/\n"
        "    └── src/\n"
        "        ├── main.py\n"
        "        └── utils/\n"
        "            └── helpers.py\n"
        "</table_of_contents>\n\n"
    )
    assert result.stdout.startswith("<documents>\n" + expected_toc)
    assert '<document index="1">\n<source>src/main.py</source>' in result.stdout
    assert '<document index="2">\n<source>src/utils/helpers.py</source>' in result.stdout
    assert result.stdout.endswith("</documents>")


def test_markdown_output(temp_project):
    result = run_fuse("src/main.py", "-m", cwd=temp_project)
    assert result.returncode == 0
    assert result.stdout == "src/main.py\n```python\ndef main():\n    print('Hello')\n\n```"


def test_paths_from_stdin(temp_project):
    result = run_fuse("-0", input="docs/README.md\0server.log\0", cwd=temp_project)
    assert result.returncode == 0
    assert result.stdout.startswith("docs/README.md\n---\n# Test Project")
    assert "server.log\n---\nDEBUG: test log" in result.stdout


def test_output_file(temp_project, tmp_path):
    output = tmp_path / "out.txt"
    result = run_fuse(".", "-e", "md", "-o", str(output), cwd=temp_project)
    assert result.returncode == 0
    assert result.stdout == ""
    assert output.read_text(encoding="utf-8") == "docs/README.md\n---\n# Test Project\nDescription.\n\n\n---"


def test_missing_path(temp_project):
    result = run_fuse("nope", cwd=temp_project)
    assert result.returncode == 1
    assert "Error: Path does not exist: nope" in result.stderr


def test_invalid_pattern(temp_project):
    result = run_fuse(".", "--ignore", "[abc", cwd=temp_project)
    assert result.returncode == 1
    assert "Invalid ignore pattern '[abc'" in result.stderr


def test_usage_error(temp_project):
    result = run_fuse(".", "-c", "-m", cwd=temp_project)
    assert result.returncode == 2


def test_binary_file_warning(temp_project):
    result = run_fuse("src", "--ignore-gitignore", cwd=temp_project)
    assert result.returncode == 0
    assert "WARNING: Skipping binary file" in result.stderr


@pytest.mark.skipif(platform.system() == "Windows", reason="Permission bits are not enforced on Windows")
@pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root can read any directory")
def test_permission_actions(temp_project):
    locked = temp_project / "locked"
    locked.mkdir()
    (locked / "secret.txt").write_text("secret")
    locked.chmod(0)
    try:
        failed = run_fuse(".", cwd=temp_project)
        assert failed.returncode == 126
        assert "Error: Cannot read" in failed.stderr

        warned = run_fuse(".", "-P", "warn", cwd=temp_project)
        assert warned.returncode == 0
        assert "WARNING: Skipping unreadable" in warned.stderr

        ignored = run_fuse(".", "-P", "ignore", cwd=temp_project)
        assert ignored.returncode == 0
        assert ignored.stderr == ""
    finally:
        locked.chmod(0o755)


@pytest.mark.skipif(platform.system() == "Windows", reason="SIGPIPE is not available on Windows")
def test_broken_pipe(tmp_path):
    for i in range(200):
        (tmp_path / f"file{i:03}.txt").write_text("line\n" * 200)

    fuse = subprocess.Popen(
        [sys.executable, "-m", "filefuse.cli.main", str(tmp_path)],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    fuse.stdout.readline()
    fuse.stdout.close()
    _, stderr = fuse.communicate(timeout=30)

    assert fuse.returncode in (0, 141)
    assert b"Traceback" not in stderr
