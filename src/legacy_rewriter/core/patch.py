"""Deferred, offset-addressed text edits over one immutable source.

All offsets address the original source, so edits computed from one parse
never need to be re-derived after earlier edits. Insertions at the same
offset are ordered by priority, then by side, then by issue order.
"""

from __future__ import annotations

import bisect
import itertools
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum, IntEnum

logger = logging.getLogger(__name__)


class EditPriority(IntEnum):
    IMPORTS = 0
    CONSTANTS = 1
    DEFINITIONS = 2
    DEFAULT = 3


class EditKind(str, Enum):
    INSERT_AFTER = "insert-after"  # attaches to the text ending at the anchor
    INSERT_BEFORE = "insert-before"  # attaches to the text starting at the anchor
    REMOVE = "remove"


_SIDE = {EditKind.INSERT_AFTER: 0, EditKind.INSERT_BEFORE: 1}


@dataclass(frozen=True)
class Edit:
    anchor: int
    kind: EditKind
    sequence: int
    text: bytes = b""
    end: int | None = None
    priority: EditPriority = EditPriority.DEFAULT

    @property
    def sort_key(self) -> tuple[int, int, int, int]:
        return (self.anchor, self.priority, _SIDE.get(self.kind, 2), self.sequence)


class PatchBuffer:
    """Collects edits against ``source`` and renders them on ``materialize``."""

    def __init__(self, source: str | bytes) -> None:
        self._source = source.encode("utf-8") if isinstance(source, str) else source
        self._edits: list[Edit] = []
        self._anchors: dict[str, int] = {}
        self._sequence = itertools.count()

    @property
    def source(self) -> bytes:
        return self._source

    @property
    def edits(self) -> tuple[Edit, ...]:
        return tuple(self._edits)

    def slice(self, start: int, end: int) -> str:
        """Return original text between two offsets."""
        self._check_range(start, end)
        return self._source[start:end].decode("utf-8")

    def anchor(self, name: str, compute: Callable[[], int]) -> int:
        """Return the offset pinned under ``name``, computing it on first use."""
        if name not in self._anchors:
            offset = compute()
            self._check_offset(offset)
            self._anchors[name] = offset
        return self._anchors[name]

    def insert_after(self, offset: int, text: str, priority: EditPriority = EditPriority.DEFAULT) -> None:
        self._insert(EditKind.INSERT_AFTER, offset, text, priority)

    def insert_before(self, offset: int, text: str, priority: EditPriority = EditPriority.DEFAULT) -> None:
        self._insert(EditKind.INSERT_BEFORE, offset, text, priority)

    def remove_range(self, start: int, end: int) -> None:
        self._check_range(start, end)
        if start == end:
            return
        self._edits.append(Edit(anchor=start, kind=EditKind.REMOVE, sequence=next(self._sequence), end=end))

    def overwrite(self, start: int, end: int, text: str) -> None:
        self.remove_range(start, end)
        self.insert_before(start, text)

    def materialize(self) -> str:
        removals = _merge_ranges((e.anchor, e.end) for e in self._edits if e.kind is EditKind.REMOVE)
        insertions = sorted((e for e in self._edits if e.kind is not EditKind.REMOVE), key=lambda e: e.sort_key)

        parts: list[bytes] = []
        position = 0
        for edit in insertions:
            if edit.anchor > position:
                parts.extend(_kept_slices(self._source, removals, position, edit.anchor))
                position = edit.anchor
            parts.append(edit.text)
        parts.extend(_kept_slices(self._source, removals, position, len(self._source)))

        logger.debug("Materialized %d edit(s) over %d bytes", len(self._edits), len(self._source))
        return b"".join(parts).decode("utf-8")

    def _insert(self, kind: EditKind, offset: int, text: str, priority: EditPriority) -> None:
        self._check_offset(offset)
        if not text:
            return
        self._edits.append(
            Edit(
                anchor=offset,
                kind=kind,
                sequence=next(self._sequence),
                text=text.encode("utf-8"),
                priority=priority,
            )
        )

    def _check_offset(self, offset: int) -> None:
        if not 0 <= offset <= len(self._source):
            raise ValueError(f"Offset {offset} is outside the source (length {len(self._source)})")

    def _check_range(self, start: int, end: int) -> None:
        self._check_offset(start)
        self._check_offset(end)
        if start > end:
            raise ValueError(f"Invalid range: start {start} is after end {end}")


def _merge_ranges(ranges: Iterable[tuple[int, int | None]]) -> list[tuple[int, int]]:
    merged: list[tuple[int, int]] = []
    for start, end in sorted((s, e) for s, e in ranges if e is not None):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def _kept_slices(source: bytes, removals: list[tuple[int, int]], start: int, end: int) -> list[bytes]:
    """Slices of ``source[start:end]`` that no removal covers."""
    slices: list[bytes] = []
    index = bisect.bisect_right(removals, (start, len(source) + 1)) - 1
    index = max(index, 0)
    cursor = start
    for removed_start, removed_end in removals[index:]:
        if removed_start >= end:
            break
        if removed_end <= cursor:
            continue
        if removed_start > cursor:
            slices.append(source[cursor:removed_start])
        cursor = max(cursor, removed_end)
    if cursor < end:
        slices.append(source[cursor:end])
    return slices
