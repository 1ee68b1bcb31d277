"""Undercover - entry point for the terminal game."""

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from undercover.main import main

if __name__ == "__main__":
    sys.exit(main())
