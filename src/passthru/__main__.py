"""passthru CLI entry point."""

from passthru.cli.app import app

if __name__ == "__main__":
    app()
