"""Command-line harness."""
