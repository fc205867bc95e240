"""ratings._version

Single place for runtime versioning / build identification.

Shown in the generated site footer so a published page can be traced back
to the code that built it.
"""

from __future__ import annotations

__version__ = "0.3.0"
__build__ = "2026-10-18"
