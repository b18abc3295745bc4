"""
Utilities package - File I/O, JSON stores, configuration and logging helpers.
"""
