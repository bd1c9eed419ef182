"""
PRIMACY pipeline shell
Main entry point for the desktop application
"""

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from primacy.app import main


if __name__ == "__main__":
    sys.exit(main())
