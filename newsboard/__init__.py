"""In-memory newsgroup server, interactive client and their binary TCP protocol."""

__version__ = "0.1.0"