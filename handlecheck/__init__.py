"""Remote-verified validation of a Mastodon handle settings field."""

__version__ = "0.1.0"
