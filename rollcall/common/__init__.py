"""
Common utilities shared by adapters.
"""
