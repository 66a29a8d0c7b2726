"""CLI application for PostgreSQL extension tooling."""

from extops.cli.commands.extensions import app

if __name__ == "__main__":
    app()
