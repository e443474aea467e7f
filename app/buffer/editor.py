from __future__ import annotations

import shutil
import subprocess
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from app.config import DEFAULT_EMEDITOR_PATH


class UnsupportedEditorError(ValueError):
    pass


class EditorLaunchError(RuntimeError):
    pass


class ProcessLauncher(Protocol):
    def launch(self, argv: Sequence[str]) -> None:
        ...


@dataclass
class SubprocessLauncher:
    """Spawn a process and return once it is up.

    A process that exits non-zero within ``grace_s`` is reported as a failed
    launch; anything still running after that keeps running and is reaped
    on a background thread when it exits.
    """

    grace_s: float = 0.5
    reapers: List[threading.Thread] = field(default_factory=list)

    def launch(self, argv: Sequence[str]) -> None:
        exe = shutil.which(argv[0]) or argv[0]
        try:
            proc = subprocess.Popen(
                [exe, *argv[1:]],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise EditorLaunchError(f"cannot start {argv[0]}: {e}") from e
        try:
            code = proc.wait(timeout=self.grace_s)
        except subprocess.TimeoutExpired:
            # Still running: reap it in the background once the editor closes
            self.reapers = [t for t in self.reapers if t.is_alive()]
            reaper = threading.Thread(target=proc.wait, daemon=True)
            reaper.start()
            self.reapers.append(reaper)
            return
        if code != 0:
            raise EditorLaunchError(f"{argv[0]} exited with status {code}")


@dataclass
class EditorLauncher:
    path: Path
    launcher: ProcessLauncher
    emeditor_path: str = DEFAULT_EMEDITOR_PATH
    commands: Dict[str, List[str]] = field(init=False)

    def __post_init__(self) -> None:
        self.commands = {
            "notepad": ["notepad"],
            "vscode": ["code"],
            "emeditor": [self.emeditor_path],
        }

    def command_for(self, editor: Optional[str]) -> List[str]:
        if editor not in self.commands:
            raise UnsupportedEditorError(editor)
        return [*self.commands[editor], str(self.path)]

    def open(self, editor: Optional[str]) -> None:
        self.launcher.launch(self.command_for(editor))
