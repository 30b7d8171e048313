"""jules-bridge: drive Jules coding sessions and their pull requests from a terminal chat."""

__version__ = "0.1.0"
