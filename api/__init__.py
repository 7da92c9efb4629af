"""
HTTP API package for DocCompare.
"""
