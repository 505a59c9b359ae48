"""Command-line interface for baselinelint."""
