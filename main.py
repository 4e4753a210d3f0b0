#!/usr/bin/env python3
"""DTO OpenAPI Generator - Entry point."""
import sys
import os

# Run from a checkout without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dto_openapi.cli import cli


if __name__ == "__main__":
    cli()
