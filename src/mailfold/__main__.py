"""Run the mailfold command line with ``python -m mailfold``."""

from mailfold.cli.app import app


def main() -> None:
    """Invoke the CLI app."""
    app()


if __name__ == "__main__":
    main()
