"""
Columnar DB - a minimal single-node column-store database

Tables are stored column-major, manipulated through a small text command
language, and persisted as one self-contained JSON record per table.
"""

__version__ = "0.1.0"
