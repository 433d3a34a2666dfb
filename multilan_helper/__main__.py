"""
Entry point for running multilan-helper as a module.

Usage:
    python -m multilan_helper --help
    python -m multilan_helper search "Submit" --catalog api-data.json
"""
from .cli import app


if __name__ == "__main__":
    app()
