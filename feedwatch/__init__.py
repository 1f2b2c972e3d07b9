"""Report links that are new in a set of RSS/Atom feeds since the last run."""

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
