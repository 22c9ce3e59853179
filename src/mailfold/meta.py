"""Package metadata for mailfold."""

__app_name__ = "mailfold"
__version__ = "0.4.0"
__author__ = "Michel TRUONG"
__description__ = "RFC 5322 / MIME message composer with a priority-driven header folding engine"

__all__ = [
    "__app_name__",
    "__author__",
    "__description__",
    "__version__",
]
