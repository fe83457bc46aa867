"""Pytest configuration for the static lookup tests."""

import sys
from pathlib import Path

# Make primitives/ and static_lookup/ importable without installing
root_dir = Path(__file__).parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))
