#!/usr/bin/env python3
"""
Main script for the IDAQ lab toolkit.
"""

# Commands:
#   ttest  compare two measurement sets and print the lab report
#   phase  phase difference at the dominant frequency (LVDT calibration)
#   save   bundle the working directory and open figures into a ZIP

import logging
import os
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from idaq.cli import main

if __name__ == "__main__":
    sys.exit(main())
