"""quickfind - hybrid file search for command launchers.

A fast external-indexer pass backed by a deep filesystem walk, with
fuzzy ranking and a small query-filter language.
"""

__version__ = "0.1.0"
