"""Entry point for running ticketscan as a module.

This allows running the application with:
    python -m ticketscan scan [OPTIONS] URL
"""

from ticketscan.cli import app

if __name__ == "__main__":
    app()
