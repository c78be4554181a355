#!/usr/bin/env python3
"""
capharness: deterministic capability harness for scripts.

Thin shim exposing the CLI app from capharness.cli.cli.

Usage:
    capharness run [OPTIONS] SCRIPT
    capharness files [OPTIONS] [ROOT]
    capharness check [OPTIONS] CASES
"""

from capharness.cli.cli import app, bootstrap

# Load the user's .env before any command reads configuration
bootstrap()

if __name__ == "__main__":
    app()
