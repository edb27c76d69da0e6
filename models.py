#models.py
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Literal, Optional

IndexKind = Literal["tool-generated", "real-homepage", "undetermined"]


@dataclass(frozen=True, slots=True)
class IndexConflict:
    outer_path: Path
    inner_path: Path
    outer_kind: IndexKind
    inner_kind: IndexKind
    backup_path: Path  # where the outer index.html was renamed to
    needs_review: bool = False  # outer page was not positively identified as the mirror's


@dataclass(slots=True)
class RestructureReport:
    moved: List[str] = field(default_factory=list)
    merged: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    conflict: Optional[IndexConflict] = None
    subdir_removed: bool = False


@dataclass(slots=True)
class BatchStats:
    scanned: int = 0
    changed: int = 0
    failed: int = 0

    @property
    def processed(self) -> int:
        return self.scanned - self.failed

    def to_dict(self) -> Dict[str, int]:
        return {
            "scanned": self.scanned,
            "processed": self.processed,
            "changed": self.changed,
            "failed": self.failed,
        }
