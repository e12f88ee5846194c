"""
OOC Football Scheduling System.
"""

__version__ = "1.0.0"
