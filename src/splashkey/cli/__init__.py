"""Command-line interface for SPLASHKEY."""
