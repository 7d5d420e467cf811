"""Unified diff parser: turns ``git diff`` output into Patch objects.

Each hunk keeps every line record (context, addition, deletion) with its old
and new line numbers, mirroring what a native diff backend exposes. Lines keep
their own terminators so content can be spliced back verbatim.
"""

from __future__ import annotations

import re
from typing import Generator, List, Optional

from gitoscope.git.models import DiffLineRecord, LineOrigin, Patch, PatchHunk

# --- Regex patterns for diff parsing ---

_QUOTED = r'"(?:[^"\\]|\\.)*"'
_DIFF_HEADER_RE = re.compile(
    rf"^diff --git (?P<old>{_QUOTED}|a/.*?) (?P<new>{_QUOTED}|b/.*)$"
)
_HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@"
)
_BINARY_RE = re.compile(r"^Binary files .* and .* differ$")
_FILE_HEADER_OLD = re.compile(r"^--- (.*)$")
_FILE_HEADER_NEW = re.compile(r"^\+\+\+ (.*)$")
_NO_NEWLINE = "\\ No newline at end of file"

NO_LINE = -1


_ESCAPES = {
    "a": "\a", "b": "\b", "t": "\t", "n": "\n",
    "v": "\v", "f": "\f", "r": "\r", '"': '"', "\\": "\\",
}


def _unquote(token: str) -> str:
    """Undo git's C-style quoting of a path token (octal escapes are UTF-8 bytes)."""
    if len(token) < 2 or not (token.startswith('"') and token.endswith('"')):
        return token
    body = token[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            octal = body[i + 1:i + 4]
            if len(octal) == 3 and all(c in "01234567" for c in octal):
                out.append(int(octal, 8) & 0xFF)
                i += 4
                continue
            out += _ESCAPES.get(body[i + 1], body[i + 1]).encode("utf-8")
            i += 2
            continue
        out += ch.encode("utf-8")
        i += 1
    return out.decode("utf-8", errors="replace")


def _header_path(token: str, prefix: str) -> Optional[str]:
    """Path named by a ``diff --git``, ``---`` or ``+++`` token, None for /dev/null.

    git ends unquoted header paths containing a space with a tab.
    """
    token = token.rstrip("\t")
    if token == "/dev/null":
        return None
    path = _unquote(token)
    return path[len(prefix):] if path.startswith(prefix) else path


def _split_lines(text: str) -> List[str]:
    """Split on LF only, keeping terminators (CR stays part of the content)."""
    parts = text.split("\n")
    tail = parts.pop()
    lines = [p + "\n" for p in parts]
    if tail:
        lines.append(tail)
    return lines


def _strip_newline(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


class DiffParser:
    """Parse unified diff text and yield one Patch per file.

    Usage::

        for patch in DiffParser(diff_text).parse():
            for hunk in patch.hunks:
                ...
    """

    def __init__(self, diff_text: str) -> None:
        self._lines = _split_lines(diff_text)

    def parse(self) -> Generator[Patch, None, None]:
        """Yield Patch objects in diff order."""
        current: Optional[Patch] = None
        hunk: Optional[PatchHunk] = None
        old_remaining = 0
        new_remaining = 0
        old_no = 0
        new_no = 0

        for raw_line in self._lines:
            line = _strip_newline(raw_line)

            # --- inside a hunk: consume exactly the announced line counts ---
            if hunk is not None and (old_remaining > 0 or new_remaining > 0):
                prefix, content = raw_line[:1], raw_line[1:]
                if prefix == " ":
                    hunk.lines.append(
                        DiffLineRecord(LineOrigin.CONTEXT, content, old_no, new_no)
                    )
                    old_no += 1
                    new_no += 1
                    old_remaining -= 1
                    new_remaining -= 1
                    continue
                if prefix == "-":
                    hunk.lines.append(
                        DiffLineRecord(LineOrigin.DELETION, content, old_no, NO_LINE)
                    )
                    old_no += 1
                    old_remaining -= 1
                    continue
                if prefix == "+":
                    hunk.lines.append(
                        DiffLineRecord(LineOrigin.ADDITION, content, NO_LINE, new_no)
                    )
                    new_no += 1
                    new_remaining -= 1
                    continue
                if line == _NO_NEWLINE:
                    self._drop_terminator(hunk)
                    continue
                # Malformed hunk: fall through and treat as a header line
                old_remaining = new_remaining = 0

            # --- "\ No newline at end of file" after the last hunk line ---
            if line == _NO_NEWLINE:
                if hunk is not None:
                    self._drop_terminator(hunk)
                continue

            # --- diff --git header → new file context ---
            m = _DIFF_HEADER_RE.match(line)
            if m:
                if current is not None:
                    yield current
                current = Patch(
                    old_path=_header_path(m.group("old"), "a/") or "",
                    new_path=_header_path(m.group("new"), "b/") or "",
                )
                hunk = None
                continue

            if current is None:
                continue

            # --- File headers carry unambiguous paths ---
            om = _FILE_HEADER_OLD.match(line)
            if om and hunk is None:
                old_path = _header_path(om.group(1), "a/")
                if old_path is not None:
                    current.old_path = old_path
                continue
            nm = _FILE_HEADER_NEW.match(line)
            if nm and hunk is None:
                new_path = _header_path(nm.group(1), "b/")
                if new_path is not None:
                    current.new_path = new_path
                continue

            if _BINARY_RE.match(line):
                current.is_binary = True
                continue

            # --- Hunk header ---
            hm = _HUNK_HEADER_RE.match(line)
            if hm:
                old_start = int(hm.group(1))
                old_count = int(hm.group(2)) if hm.group(2) is not None else 1
                new_start = int(hm.group(3))
                new_count = int(hm.group(4)) if hm.group(4) is not None else 1
                hunk = PatchHunk(
                    old_start=old_start,
                    old_lines=old_count,
                    new_start=new_start,
                    new_lines=new_count,
                )
                current.hunks.append(hunk)
                old_remaining, new_remaining = old_count, new_count
                old_no, new_no = old_start, new_start
                continue

            # index, mode, new/deleted file lines → metadata we do not need

        if current is not None:
            yield current

    @staticmethod
    def _drop_terminator(hunk: PatchHunk) -> None:
        """The previous line has no trailing newline in its file."""
        if not hunk.lines:
            return
        last = hunk.lines[-1]
        hunk.lines[-1] = DiffLineRecord(
            last.origin, _strip_newline(last.content), last.old_lineno, last.new_lineno
        )
