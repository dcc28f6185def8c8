"""Command groups for the module build tool CLI."""
