"""Command-line interface for local replay and status polling."""
