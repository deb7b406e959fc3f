"""HexChat - client-side conversation manager for chat sessions."""

__version__ = "0.1.0"
