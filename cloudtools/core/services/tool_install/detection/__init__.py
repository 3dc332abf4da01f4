"""
L3 Detection — read system state, never write.

Platform probing, PATH lookups, and ``ibmcloud plugin list``.
"""
