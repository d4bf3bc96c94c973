"""
Run the geometry, model and IO tests.

Execute from project root: python -m pytest src/test/
Or run this file directly: python src/test/run_tests.py
"""

import sys
from pathlib import Path

import pytest

if __name__ == "__main__":
    sys.exit(pytest.main([str(Path(__file__).parent), "-v"]))
