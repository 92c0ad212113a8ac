"""
depmirror: offline registry dependency auditor.

depmirror checks whether a project's resolved dependencies are available
in a fixed offline registry (a flat ``<name>-<version>`` listing) and
classifies every missing package by how risky it is to add:

    • minor/patch upgrades are approved automatically
    • major upgrades, downgrades and new dependencies need approval

The optional ``--write`` mode appends the missing artifacts to the
listing and keeps it sorted.
"""

from __future__ import annotations

from depmirror.__version__ import __version__

__author__ = "depmirror Contributors"
__license__ = "Apache-2.0"
__description__ = "Audit project dependencies against an offline package registry."

__all__ = [
    "__version__",
]
