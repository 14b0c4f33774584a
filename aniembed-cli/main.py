#!/usr/bin/env python3
"""
aniembed - look up the embed servers of an anime episode.

    python main.py spy-x-family-3x1
    python main.py --data-id 20333 --season 1 --episode 3
"""
import sys

try:
    from aniembed.cli import main
except ImportError as e:
    print(f"Error: aniembed is not importable ({e}). Install it with: pip install -e .")
    sys.exit(1)

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(130)
