"""
L2 Resolver — version and download URL resolution.
"""
