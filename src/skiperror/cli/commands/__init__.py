"""Subcommands of the `skiperror` CLI."""
