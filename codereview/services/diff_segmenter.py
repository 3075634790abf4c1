"""Unified diff segmentation into per-file, per-hunk review units."""

import re

from codereview.models.review import Hunk

FALLBACK_FILE_PATH = "all"

FILE_HEADER = re.compile(r"^\+\+\+ (?P<path>.+)$", re.MULTILINE)
HUNK_HEADER = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(?P<start>\d+)(?:,(?P<count>\d+))? @@.*$",
    re.MULTILINE,
)

# Lines that introduce the next file in a git-style diff
PREAMBLE_PREFIXES = (
    "diff --git ",
    "index ",
    "--- ",
    "new file mode",
    "deleted file mode",
    "old mode",
    "new mode",
    "similarity index",
    "dissimilarity index",
    "rename from",
    "rename to",
    "copy from",
    "copy to",
    "Binary files",
)


def segment_patch(patch: str) -> list[Hunk]:
    """Split a unified diff into hunks, in input order.

    Each ``+++`` header opens a file block that runs until the next file's
    preamble. Within a block, each ``@@`` header opens a hunk that runs until
    the next hunk header or the end of the block.

    Args:
        patch: Raw unified diff text

    Returns:
        Ordered hunks. When no file block yields a hunk (empty input, no file
        headers, or headers without hunks) a single hunk for path ``"all"``
        holding the entire input is returned.
    """
    headers = _file_headers(patch)

    hunks: list[Hunk] = []
    for i, header in enumerate(headers):
        block_start = header.end()
        if i + 1 < len(headers):
            block_end = _preamble_start(patch, headers[i + 1].start())
        else:
            block_end = len(patch)
        file_path = _resolve_path(patch, header)
        hunks.extend(_split_block(file_path, patch, block_start, block_end))

    if not hunks:
        return [Hunk(file_path=FALLBACK_FILE_PATH, start_line=0, end_line=0, text=patch)]
    return hunks


def _file_headers(patch: str) -> list[re.Match[str]]:
    """Locate file headers in order.

    A ``+++`` line inside an open hunk is an added line starting with ``++``
    unless a ``---`` line sits directly above it.
    """
    headers: list[re.Match[str]] = []
    for match in FILE_HEADER.finditer(patch):
        if _follows_old_path(patch, match.start()) or not _hunk_open(
            patch, headers, match.start()
        ):
            headers.append(match)
    return headers


def _hunk_open(patch: str, headers: list[re.Match[str]], pos: int) -> bool:
    """True if a hunk header appears between the last file header and ``pos``."""
    if not headers:
        return False
    return HUNK_HEADER.search(patch, headers[-1].end(), pos) is not None


def _split_block(file_path: str, patch: str, start: int, end: int) -> list[Hunk]:
    """Cut one file block into hunks at each hunk header."""
    matches = list(HUNK_HEADER.finditer(patch, start, end))
    hunks = []
    for j, match in enumerate(matches):
        hunk_end = matches[j + 1].start() if j + 1 < len(matches) else end
        start_line, end_line = _line_range(match)
        hunks.append(
            Hunk(
                file_path=file_path,
                start_line=start_line,
                end_line=end_line,
                text=patch[match.start() : hunk_end],
            )
        )
    return hunks


def _line_range(match: re.Match[str]) -> tuple[int, int]:
    """Best-effort new-file line range from a hunk header."""
    start = int(match.group("start"))
    count = int(match.group("count")) if match.group("count") is not None else 1
    if start == 0:
        return 0, 0
    return start, start + max(count, 1) - 1


def _previous_line(patch: str, pos: int) -> tuple[int, str]:
    """Return (offset, text) of the line that ends just before ``pos``."""
    if pos == 0:
        return -1, ""
    line_start = patch.rfind("\n", 0, pos - 1) + 1
    return line_start, patch[line_start : pos - 1].rstrip("\r")


def _follows_old_path(patch: str, header_pos: int) -> bool:
    """True if the line directly above ``header_pos`` is a ``---`` line."""
    _, line = _previous_line(patch, header_pos)
    return line.startswith("--- ")


def _preamble_start(patch: str, header_pos: int) -> int:
    """Walk back from a ``+++`` header over the lines that introduce its file."""
    pos = header_pos
    while pos > 0:
        line_start, line = _previous_line(patch, pos)
        if not line.startswith(PREAMBLE_PREFIXES):
            break
        pos = line_start
    return pos


def _clean_path(raw: str) -> str:
    path = raw.split("\t", 1)[0].strip()
    if path.startswith(("a/", "b/")):
        path = path[2:]
    return path


def _resolve_path(patch: str, header: re.Match[str]) -> str:
    """File path for a block; deleted files fall back to the ``---`` path."""
    path = _clean_path(header.group("path"))
    if path != "/dev/null":
        return path
    _, old_line = _previous_line(patch, header.start())
    if not old_line.startswith("--- "):
        return path
    old_path = _clean_path(old_line[len("--- ") :])
    return old_path if old_path != "/dev/null" else path
