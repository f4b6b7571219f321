"""Test package for the aircraft catalog.

The ``airfleet`` package lives one directory above this one.  Appending the
repository root to ``sys.path`` lets the suite run from a plain checkout as
well as from an editable install.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))
