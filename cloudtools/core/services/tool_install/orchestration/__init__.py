"""
L5 Orchestration — single and batch installs.
"""
