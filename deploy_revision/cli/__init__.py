"""Command line interface for deploy-revision"""

from .main import cli, main

__all__ = ["cli", "main"]
