"""addsvc — JSON-over-HTTP transport for the sum/concat service."""

__version__ = "0.1.0"
