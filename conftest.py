"""
Root conftest - shared pytest configuration.
Ensures user_service and tests packages are importable when running pytest from the repo root.
"""
import sys
from pathlib import Path

# Ensure repo root is in path for 'from user_service...' and 'from tests...' imports
_root = Path(__file__).resolve().parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))
