#!/usr/bin/env python3
"""
SnipeCord - script entry point
==============================

Same as the `snipecord` console script, runnable from a checkout.

Usage:
    python scripts/run_sniper.py
    python scripts/run_sniper.py --dry-run
    python scripts/run_sniper.py --test-webhook
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from snipecord.cli import main


if __name__ == "__main__":
    main()
