import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]


def _install(session: nox.Session) -> None:
    """Install the project with the test extra into the nox virtualenv."""
    session.install("-e", ".[test]")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest")


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no infrastructure required)."""
    _install(session)
    session.run("pytest", "tests/dsub/domain/")


@nox.session(python=PYTHON_VERSIONS)
def tests_intake(session: nox.Session) -> None:
    """Run the intake pipeline and BDD scenarios."""
    _install(session)
    session.run("pytest", "tests/dsub/application/", "tests/dsub/bdd/")
