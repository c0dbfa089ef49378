"""Test configuration and fixtures for filefuse."""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch):
    """Keep the machine's global git ignore file out of every test."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    return home


@pytest.fixture
def project(tmp_path):
    """A small project tree used across the walker and fuser tests.

    project/
    ├── README.md
    ├── main.py
    ├── notes.txt
    ├── .env
    ├── .hidden/
    │   └── secret.py
    ├── build/
    │   └── out.py
    └── src/
        ├── app.py
        └── utils/
            ├── helpers.py
            └── data.json
    """
    root = tmp_path / "project"
    (root / "src" / "utils").mkdir(parents=True)
    (root / "build").mkdir()
    (root / ".hidden").mkdir()
    (root / "README.md").write_text("# Project\n")
    (root / "main.py").write_text("print('main')\n")
    (root / "notes.txt").write_text("notes\n")
    (root / ".env").write_text("SECRET=1\n")
    (root / ".hidden" / "secret.py").write_text("x = 1\n")
    (root / "build" / "out.py").write_text("built = True\n")
    (root / "src" / "app.py").write_text("def app():\n    pass\n")
    (root / "src" / "utils" / "helpers.py").write_text("def helper():\n    pass\n")
    (root / "src" / "utils" / "data.json").write_text('{"a": 1}\n')
    return root
