"""Command-line interface for the Kalah engine."""
