"""Command implementations for the nexturno CLI."""
