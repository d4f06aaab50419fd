"""
Convenience entry point for running bhcalc as a module.

Usage: python -m bhcalc [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
