"""
CLI entry point for collegesearch.

This module serves as the entry point when collegesearch.cli is executed as a module
with `python -m collegesearch.cli`.
"""

from .main import main

if __name__ == "__main__":
    main()
