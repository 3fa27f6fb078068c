"""
Shared helpers: command execution, logging setup, task orchestration and
the bootstrap error types.
"""
