import nox


@nox.session(python=["3.9", "3.10", "3.11", "3.12"])
def tests(session):
    session.install("pytest")
    session.install(".")
    session.run("pytest")


@nox.session
def coverage(session):
    session.install(".[dev]")
    session.run("coverage", "run", "-m", "pytest")
    session.run("coverage", "report", "--include=lasdecoder/*")
