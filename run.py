#!/usr/bin/env python3
"""Convenience runner for the Park Explorer replay tool.

Usage:
    python run.py walk.gpx [--state-file milestones.json]
"""
import logging
from park_explorer.main import main

if __name__ == "__main__":
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    raise SystemExit(main())
