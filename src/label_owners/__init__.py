"""
Label Code Owners: assigns CODEOWNERS to issues when a label is applied.
"""

__version__ = "0.1.0"
