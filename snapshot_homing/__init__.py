"""
Snapshot Homing for insect-style landmark navigation.

Implements the Cartwright & Collett snapshot model: an agent remembers the
bearings and apparent sizes of surrounding landmarks as seen from a goal,
and steers back by comparing that memory with its current view.
"""

__version__ = "0.1.0"
