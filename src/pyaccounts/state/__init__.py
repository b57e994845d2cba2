"""State layer.

This package holds everything derived from a loaded payload: the
immutable snapshot, license and sleep policy, per-type service behaviour,
avatar resolution and unread/tray aggregation.
"""
