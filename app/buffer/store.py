from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class TextBuffer:
    """The single text file shared by the save/load/open-editor endpoints.

    Saves overwrite the whole file. There is no locking: concurrent saves are
    last-writer-wins.
    """

    path: Path

    def save(self, text: Optional[str]) -> None:
        # Line endings are kept exactly as sent
        self.path.write_bytes((text or "").encode("utf-8"))

    def load(self) -> str:
        # A missing or unreadable file reads as empty content
        try:
            data = self.path.read_bytes()
        except OSError:
            return ""
        return data.decode("utf-8", errors="replace")
