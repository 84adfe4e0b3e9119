"""Allow ``python -m rage`` to run the schema upgrader."""

from rage.upgrade.cli import run

run()
