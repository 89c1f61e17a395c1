"""Command line interface for canary-inventory."""
