"""
Entry Point Script (Bootstrap)
==============================
This script is a convenient runner for development checkouts.

Why is this file needed?
------------------------
1. It is located outside the 'src' package, so the CLI can be started without
   installing the project.
2. It modifies 'sys.path' to ensure Python can resolve imports like
   'from slabtemperature.model...' without errors.

Usage:
    $ python run.py --plot profile.png
    $ python run.py --gui
"""
import sys
import os

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from slabtemperature.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
