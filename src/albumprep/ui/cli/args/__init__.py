"""Command line argument handling package."""

from albumprep.ui.cli.args.options import PrepareArgs
from albumprep.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser", "PrepareArgs"]
