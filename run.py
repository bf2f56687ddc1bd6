#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Examples:
    python run.py game play --color1 blue --color2 yellow
    python run.py game check --position 0,0,...
    python run.py game benchmark --iterations 500
"""

import os
import sys

# Add the project root to Python path so the package imports without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connectfour.interfaces.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
