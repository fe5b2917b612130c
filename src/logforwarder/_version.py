"""
Package version, read by hatch at build time.
"""

__version__ = "1.2.0"
