import logging
import re
from re import Pattern

logger = logging.getLogger(__name__)

_GLOB_CACHE: dict[str, Pattern[str]] = {}

# One path segment that does not start with a dot.
_SEGMENT = r"(?!\.)[^/]+"
_WILDCARD_STARTS = ("*", "?", "[")


def _translate_class(segment: str, start: int) -> tuple[str, int] | None:
    """Translate the bracket expression opening at ``start``.

    Returns the regex and the index just past the closing ``]``, or None when
    the bracket is never closed (it is then matched literally).
    """
    j = start + 1
    if j < len(segment) and segment[j] in "!^":
        j += 1
    if j < len(segment) and segment[j] == "]":
        j += 1
    while j < len(segment) and segment[j] != "]":
        j += 1
    if j >= len(segment):
        return None

    body = segment[start + 1 : j]
    negate = body[:1] in ("!", "^")
    if negate:
        body = body[1:]
    body = body.replace("\\", "\\\\").replace("[", "\\[")
    if negate:
        return f"[^{body}/]", j + 1
    return f"[{body}]", j + 1


def _split_alternatives(body: str) -> list[str]:
    """Split a brace body on its top-level commas."""
    alternatives: list[str] = []
    depth = 0
    start = 0
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\":
            i += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        elif char == "," and depth == 0:
            alternatives.append(body[start:i])
            start = i + 1
        i += 1
    alternatives.append(body[start:])
    return alternatives


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives into separate patterns.

    A brace group without a top-level comma, or one that is never closed,
    is kept literally.
    """
    depth = 0
    start = 0
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\":
            i += 2
            continue
        if char == "{":
            if depth == 0:
                start = i
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                alternatives = _split_alternatives(pattern[start + 1 : i])
                if len(alternatives) > 1:
                    prefix, suffix = pattern[:start], pattern[i + 1 :]
                    expanded: list[str] = []
                    for alternative in alternatives:
                        expanded.extend(expand_braces(prefix + alternative + suffix))
                    return expanded
        i += 1
    return [pattern]


def _translate_segment(segment: str) -> str:
    # A segment that is only "*" must match at least one character.
    if segment and not segment.strip("*"):
        return f"{_SEGMENT}"

    regex_parts: list[str] = []
    if segment.startswith(_WILDCARD_STARTS):
        regex_parts.append(r"(?!\.)")

    i = 0
    length = len(segment)
    while i < length:
        char = segment[i]
        if char == "\\" and i + 1 < length:
            regex_parts.append(re.escape(segment[i + 1]))
            i += 2
            continue
        if char == "*":
            while i + 1 < length and segment[i + 1] == "*":
                i += 1
            regex_parts.append("[^/]*")
        elif char == "?":
            regex_parts.append("[^/]")
        elif char == "[":
            translated = _translate_class(segment, i)
            if translated is not None:
                regex, i = translated
                regex_parts.append(regex)
                continue
            regex_parts.append(re.escape(char))
        else:
            regex_parts.append(re.escape(char))
        i += 1
    return "".join(regex_parts)


def compile_glob(pattern: str) -> Pattern[str]:
    """Convert a shell glob into a compiled regex.

    ``*`` and ``?`` stay inside one path segment, ``[...]`` is a character
    class, ``{a,b}`` matches either alternative, and ``**`` as a whole
    segment spans zero or more segments. Wildcards never match a leading
    ``.`` of a segment.

    Args:
        pattern: The glob pattern string.

    Returns:
        A compiled regex pattern object.

    Raises:
        re.error: If a bracket expression produces an invalid regex.
    """
    cached = _GLOB_CACHE.get(pattern)
    if cached:
        return cached

    alternatives = [_translate(expansion) for expansion in expand_braces(pattern)]
    compiled = re.compile("^(?:" + "|".join(alternatives) + ")$")
    _GLOB_CACHE[pattern] = compiled
    return compiled


def _translate(pattern: str) -> str:
    segments: list[str] = []
    for segment in pattern.split("/"):
        # "**/**" is the same as "**"
        if segment == "**" and segments and segments[-1] == "**":
            continue
        segments.append(segment)

    regex_parts: list[str] = []
    after_globstar = False
    last_index = len(segments) - 1
    for index, segment in enumerate(segments):
        if segment == "**":
            if index == 0 and index == last_index:
                regex_parts.append(f"(?:{_SEGMENT}(?:/{_SEGMENT})*)?")
            elif index == last_index:
                regex_parts.append(f"(?:/{_SEGMENT})*/?")
            else:
                if index > 0:
                    regex_parts.append("/")
                regex_parts.append(f"(?:{_SEGMENT}/)*")
            after_globstar = True
            continue

        if index > 0 and not after_globstar:
            regex_parts.append("/")
        regex_parts.append(_translate_segment(segment))
        after_globstar = False

    return "".join(regex_parts)


def glob_matches(path: str, pattern: str) -> bool:
    """Check if a repository path matches a glob pattern.

    Args:
        path: The file path to check, relative to the repository root.
        pattern: The glob pattern.

    Returns:
        True if the path matches, False otherwise (including for patterns
        that cannot be compiled).
    """
    if not path or not pattern:
        return False

    try:
        compiled = compile_glob(pattern)
    except re.error:
        logger.error(f"Invalid glob pattern: {pattern}")
        return False
    return compiled.match(path) is not None
