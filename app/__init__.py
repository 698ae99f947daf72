"""Command-line frontend package."""
