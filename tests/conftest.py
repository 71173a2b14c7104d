"""
Pytest configuration for the ClientVault test suite.
"""
import sys
from pathlib import Path

# Ensure project root is on sys.path when the package is not installed
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
