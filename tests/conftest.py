import sys
from pathlib import Path

# This file lives at <project_root>/tests/conftest.py
SRC_DIR = Path(__file__).resolve().parents[1] / "src"

# Allow running the tests from a checkout without installing the package
src_path = str(SRC_DIR)
if src_path not in sys.path:
    sys.path.insert(0, src_path)
