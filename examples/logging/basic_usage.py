"""Watch folding decisions through the mailfold logger.

The ``debug`` preset enables the TRACE level, where the folder reports
every fold it makes.

Run this script:
    python examples/logging/basic_usage.py
"""

from __future__ import annotations

from mailfold import Subject, get_logger, init_logging


def main() -> None:
    """Render a long subject with trace logging enabled."""
    init_logging(preset="debug")
    log = get_logger("examples")
    log.info("Rendering a subject that needs folding")
    print(Subject("A subject line that is much longer than seventy-eight octets and must fold").render())


if __name__ == "__main__":  # pragma: no cover - manual example
    main()
