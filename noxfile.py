import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]

SUITES = {
    "domain": [
        "tests/catalogue/domain/",
        "tests/ordering/domain/",
        "tests/loyalty/domain/",
        "tests/shared/",
    ],
    "storefront": ["tests/storefront/"],
    "integration": ["tests/", "-m", "integration"],
}


def _install(session: nox.Session) -> None:
    session.run("poetry", "install", "--all-extras", external=True)
    # psycopg2 ships a compiled extension; a cached wheel may target another interpreter
    session.run("pip", "install", "--force-reinstall", "--no-cache-dir", "psycopg2-binary")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the whole suite against the in-memory providers."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
@nox.parametrize("suite", list(SUITES))
def suite(session: nox.Session, suite: str) -> None:
    """Run one slice of the suite, e.g. ``nox -s "suite(suite='storefront')"``."""
    _install(session)
    session.run("pytest", *SUITES[suite], *session.posargs)

