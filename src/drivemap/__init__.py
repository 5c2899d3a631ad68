from __future__ import annotations

"""
drivemap: hierarchical content model for Drive-like file trees.

Decodes naming conventions, builds immutable hierarchies and validates
their structural invariants.
"""

__version__ = "1.0.0"
