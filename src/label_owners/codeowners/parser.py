"""
CODEOWNERS parsing and path matching.

A CODEOWNERS body is turned into an ordered list of (pattern, owners)
entries. Lookups walk that list in file order and the first matching
pattern decides the owners.
"""

import logging
import re
from typing import NamedTuple

from label_owners.core.utils.patterns import glob_matches

logger = logging.getLogger(__name__)

_INLINE_COMMENT = re.compile(r"#.*")
_SPACE_RUN = re.compile(r" {2,}")


class OwnershipEntry(NamedTuple):
    """A CODEOWNERS pattern and the owners it assigns, in declared order."""

    pattern: str
    owners: list[str]


def parse_line(line: str) -> OwnershipEntry | None:
    """
    Parse one CODEOWNERS line.

    Only the first run of two or more spaces is collapsed, so a line with
    several wide gaps produces empty owner tokens after the first gap.

    Returns:
        The entry, or None for blank, comment-only and pattern-only lines.
    """
    line = _INLINE_COMMENT.sub("", line, count=1).strip()
    line = _SPACE_RUN.sub(" ", line, count=1)

    if not line or " " not in line:
        return None

    pattern, *owners = line.split(" ")
    # The REST API accepts owners without the leading "@"
    return OwnershipEntry(pattern, [owner.removeprefix("@") for owner in owners])


class CodeOwnersParser:
    """Parser for CODEOWNERS files."""

    def __init__(self, codeowners_content: str):
        self.codeowners_content = codeowners_content
        self.owners_map = self._parse_codeowners()

    def _parse_codeowners(self) -> list[OwnershipEntry]:
        """
        Parse CODEOWNERS content into an ordered list of entries.

        A pattern declared twice keeps the position of its first declaration
        and the owners of its last one.

        Returns:
            List of OwnershipEntry in file order
        """
        owners_map: list[OwnershipEntry] = []
        positions: dict[str, int] = {}

        for line_num, line in enumerate(self.codeowners_content.split("\n"), 1):
            entry = parse_line(line)
            if entry is None:
                continue

            if entry.pattern in positions:
                logger.debug(f"CODEOWNERS line {line_num} overrides pattern {entry.pattern}")
                owners_map[positions[entry.pattern]] = entry
            else:
                positions[entry.pattern] = len(owners_map)
                owners_map.append(entry)

        return owners_map

    def get_owners_for_file(self, file_path: str) -> list[str]:
        """
        Get the owners of the first pattern that matches a file.

        Args:
            file_path: Path to the file relative to repository root

        Returns:
            List of owner usernames/teams, empty if nothing matches
        """
        return owners_for_path(self.owners_map, file_path)

    def __len__(self) -> int:
        return len(self.owners_map)


def parse_codeowners(codeowners_content: str) -> list[OwnershipEntry]:
    """Parse CODEOWNERS content into its ordered ownership table."""
    return CodeOwnersParser(codeowners_content).owners_map


def owners_for_path(owners_map: list[OwnershipEntry], path: str) -> list[str]:
    """First-match lookup of a path in a parsed ownership table."""
    for pattern, owners in owners_map:
        if glob_matches(path, pattern):
            return list(owners)
    return []
