#!/usr/bin/env python3
"""
CLI entry point for runofshow.cli module.

This allows running: python -m runofshow.cli
"""

from .main import cli

if __name__ == "__main__":
    cli()
