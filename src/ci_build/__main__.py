"""Allow ``python -m ci_build``."""

from ci_build.cli import app

app(prog_name="ci-build")
