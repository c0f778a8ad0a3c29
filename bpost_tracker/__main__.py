"""Run the tracker with ``python -m bpost_tracker``."""

from bpost_tracker.main import run

run()
