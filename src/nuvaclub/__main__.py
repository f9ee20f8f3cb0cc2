"""Main entry point for the nuvaclub package."""

from nuvaclub.cli import app

if __name__ == "__main__":
    app()
