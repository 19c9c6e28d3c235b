import io
import shutil

import pytest

from pyshell.session import ShellSession


SH = shutil.which("sh") or "/bin/sh"


def make_executable(directory, name, body="#!/bin/sh\n", mode=0o755):
    path = directory / name
    path.write_text(body)
    path.chmod(mode)
    return path


def output(session):
    return session.stdout.getvalue().decode()


def errors(session):
    return session.stderr.getvalue().decode()


@pytest.fixture
def bin_dir(tmp_path):
    d = tmp_path / "bin"
    d.mkdir()
    return d


@pytest.fixture
def home(tmp_path):
    d = tmp_path / "home"
    d.mkdir()
    return d


@pytest.fixture
def session(tmp_path, bin_dir, home, monkeypatch):
    """A session with in-memory streams, PATH=bin_dir and cwd=tmp_path."""
    monkeypatch.chdir(tmp_path)
    environ = {"PATH": str(bin_dir), "HOME": str(home)}
    return ShellSession(environ=environ, stdout=io.BytesIO(), stderr=io.BytesIO())
