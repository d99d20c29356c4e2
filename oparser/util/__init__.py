"""
Utility functions and helpers.

Modules:
- config: Extraction settings lookup from the workspace configuration
- files: File reading/writing and hashing helpers
- logging: Console logging configuration
- progress: Operation status output using rich
"""
