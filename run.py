#!/usr/bin/env python3
"""
run.py - Main entry point for the dropfour board engine

Examples:

    # Hot-seat game on the default 7x7 board
    python run.py play

    # Smaller board with debug logging
    python run.py play --size 5 --debug

    # Inspect a 4x4 position (column by column, bottom row first)
    python run.py test --position 1,1,1,1,2,2,2,0,0,0,0,0,0,0,0,0

    # Benchmark with 5000 iterations
    python run.py benchmark --iterations 5000
"""

import os
import sys

# Add the project root to Python path so the package imports from a checkout
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dropfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
