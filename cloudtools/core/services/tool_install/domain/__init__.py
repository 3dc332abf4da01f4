"""
L1 Domain — pure input validation, no side effects beyond PATH lookups.
"""
