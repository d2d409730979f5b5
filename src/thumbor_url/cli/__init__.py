"""Command-line interface for thumbor-url."""
