"""Split, query and generate timestamped sensor reading logs."""

__version__ = "0.1.0"