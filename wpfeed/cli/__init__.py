"""Command line interface for wpfeed."""
