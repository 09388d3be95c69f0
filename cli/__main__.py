"""
Entry point for running kana-trainer as a module.

Usage:
    python -m cli --main
    python -m cli --all --katakana
    python -m cli --stats
"""

import sys

from .commands import main

if __name__ == "__main__":
    sys.exit(main())
