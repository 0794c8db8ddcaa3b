"""Subcommands exposed by the pdftoolkit CLI."""
