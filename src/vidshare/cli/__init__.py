"""Command-line interface package for vidshare."""

from vidshare.cli.main import CLIApplication, create_app

__all__ = ["CLIApplication", "create_app"]
