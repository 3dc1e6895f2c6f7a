"""
Commands implementing the pair modes.
"""
