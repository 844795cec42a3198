# scope_intake/__main__.py
"""Entry point for `python -m scope_intake`."""

from scope_intake.cli import app

if __name__ == "__main__":
    app()
