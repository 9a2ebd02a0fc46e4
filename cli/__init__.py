"""Command-line handlers for the bindery CLI."""
