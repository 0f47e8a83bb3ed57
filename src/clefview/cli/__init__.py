"""
Command line interface for clefview.
"""
