"""Command-line client for asking LLM providers through one uniform contract."""

__version__ = "0.4.0"
