"""
CLI command implementations.

Each module exposes a single click command registered in cli/main.py.
"""
