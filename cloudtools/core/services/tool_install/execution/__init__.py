"""
L4 Execution — subprocesses, file placement, installers.
"""
