"""Command line interface for scrublog."""
