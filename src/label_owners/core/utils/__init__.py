"""
Shared utilities for logging and glob matching.
"""

from label_owners.core.utils.logging import configure_logging, log_operation
from label_owners.core.utils.patterns import compile_glob, glob_matches

__all__ = [
    "configure_logging",
    "log_operation",
    "compile_glob",
    "glob_matches",
]
