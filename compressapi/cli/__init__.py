"""
Command line interface for compressapi.
"""
from .commands import app

__all__ = ['app']

# This allows the module to be run directly with `python -m compressapi.cli`
if __name__ == "__main__":
    app()
