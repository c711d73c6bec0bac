"""Main entry point for quizform CLI."""

from quizform.cli.app import app


def main():
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
