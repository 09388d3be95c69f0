#!/usr/bin/env python3
"""
kana-trainer — kana → romaji reaction-time trainer

Shows one kana at a time, times how long you take to type its romaji, and
keeps a log of every attempt so you can watch your ms/char fall over time.

Usage:
    python kana-trainer.py --main        # あ い う … ん
    python kana-trainer.py --daku        # が ぎ … ぽ
    python kana-trainer.py --comb        # きゃ きゅ … ぴょ
    python kana-trainer.py --all
    python kana-trainer.py --stats       # history from the attempt log

This file is a thin wrapper around the kana-trainer packages.
For the implementation, see the kana_platform/ and cli/ directories.
"""

import sys

from cli.commands import main

if __name__ == "__main__":
    sys.exit(main())
