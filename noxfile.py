"""Nox sessions for ncmpy development tasks."""

from __future__ import annotations

import sys

import nox

PACKAGE = "src/ncmpy"
COVERAGE_FLOOR = "80"
# Tests that talk to a real MPD daemon carry the "mpd" marker.
LIVE_MARKER = "mpd"

nox.options.error_on_missing_interpreters = False
nox.options.sessions = ["lint", "typecheck", "tests"]


def _coverage(session: nox.Session, *prefix: str, external: bool = False) -> None:
    session.run(
        *prefix, "coverage", "run", "--source=ncmpy", "-m", "pytest", external=external
    )
    session.run(
        *prefix,
        "coverage",
        "report",
        f"--fail-under={COVERAGE_FLOOR}",
        "-m",
        external=external,
    )


@nox.session
def lint(session: nox.Session) -> None:
    """Run ruff linting and formatting checks."""
    session.install("ruff")
    session.run("ruff", "check", ".")
    session.run("ruff", "format", "--check", ".")


@nox.session(name="lint-fix")
def lint_fix(session: nox.Session) -> None:
    """Apply ruff fixes and formatting."""
    session.install("ruff")
    session.run("ruff", "check", "--fix", ".")
    session.run("ruff", "format", ".")


@nox.session
def tests(session: nox.Session) -> None:
    """Run pytest without the live daemon tests."""
    session.install("-e", ".[dev]")
    session.run("pytest", "-q", env={"NCMPY_CI": "1"})


@nox.session
def live(session: nox.Session) -> None:
    """Run only the tests that need a reachable MPD daemon."""
    session.install("-e", ".[dev]")
    session.run("pytest", "-q", "-m", LIVE_MARKER, *session.posargs)


@nox.session
def typecheck(session: nox.Session) -> None:
    session.install("-e", ".[dev]")
    session.run("mypy", PACKAGE)


@nox.session
def build(session: nox.Session) -> None:
    """Build sdist and wheel artifacts."""
    session.install("build")
    session.run("python", "-m", "build")


@nox.session
def coverage(session: nox.Session) -> None:
    session.install("-e", ".[dev]")
    _coverage(session)


# --------------------------------------------------
#                  LOCAL DEV TESTING
# --------------------------------------------------


@nox.session(name="tests-dev", venv_backend="none")
def tests_dev(session: nox.Session) -> None:
    """Fast local pytest using the active venv."""
    session.run("python", "-m", "pytest", "-q", *session.posargs, external=True)


@nox.session(name="coverage-dev", venv_backend="none")
def coverage_dev(session: nox.Session) -> None:
    _coverage(session, "python", "-m", external=True)


@nox.session(name="local-dev", venv_backend="none")
def local_dev(session: nox.Session) -> None:
    """Run ruff, mypy and pytest against the active venv."""
    for args in (
        ("ruff", "check", "--fix", "."),
        ("ruff", "format", "."),
        ("mypy", PACKAGE),
        ("pytest", "-q"),
    ):
        session.run(sys.executable, "-m", *args, external=True)
