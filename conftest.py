"""
Root pytest configuration.

Makes the upgrade_params package importable when running pytest from the
repository root without installing it first.
"""

import sys
from pathlib import Path

_current_dir = Path(__file__).resolve().parent
if str(_current_dir) not in sys.path:
    sys.path.insert(0, str(_current_dir))
