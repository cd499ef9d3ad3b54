"""Command groups for the Basiq client CLI."""
