"""
CODEOWNERS discovery, parsing and path matching.
"""

from label_owners.codeowners.locator import CODEOWNERS_PATHS, CodeOwnersResolver
from label_owners.codeowners.parser import (
    CodeOwnersParser,
    OwnershipEntry,
    owners_for_path,
    parse_codeowners,
    parse_line,
)

__all__ = [
    "CODEOWNERS_PATHS",
    "CodeOwnersParser",
    "CodeOwnersResolver",
    "OwnershipEntry",
    "owners_for_path",
    "parse_codeowners",
    "parse_line",
]
