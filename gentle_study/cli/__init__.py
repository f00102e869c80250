"""Command-line interface for inspecting the scheduling engine."""
