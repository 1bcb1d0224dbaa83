"""Command line interface for livecon."""
