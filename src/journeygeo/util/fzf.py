# journeygeo/util/fzf.py
"""
Interactive journey file picker built on `fzf`.

Candidates are listed by their path relative to the journeys directory
(e.g. "2025/10/morning-walk.json") so files with the same name in different
folders stay distinguishable. The full path rides along in a hidden column.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from shutil import which
from typing import Optional

from journeygeo.errors import FzfNotFoundError, SelectionError

# 0 = selection made, 1 = no match, 130 = Esc / Ctrl-C
_FZF_OK_CODES = (0, 1, 130)


def display_label(path: Path, root: Optional[Path] = None) -> str:
    """Relative path under root when possible, else the bare file name."""
    if root is not None:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            pass
    return path.name


def fzf_select_paths(
        paths: list[Path], *,
        header: str,
        root: Optional[Path] = None,
        multi: bool = True,
        preview: str | None = "head -c 2000 {2}",
) -> list[Path]:
    """
    Let the user pick journey files; returns [] when the picker is dismissed.

    Raises:
      FzfNotFoundError, SelectionError
    """
    if not which("fzf"):
        raise FzfNotFoundError("fzf not found on PATH")

    input_text = "".join(f"{display_label(p, root)}\t{p}\n" for p in paths)

    cmd = [
        "fzf",
        "--delimiter=\t",
        "--with-nth=1",
        "--height=60%",
        "--layout=reverse",
        "--border",
        "--header", header,
    ]
    if multi:
        cmd.append("--multi")
    if preview:
        cmd.extend(["--preview", preview, "--preview-window", "right:50%:wrap"])

    proc = subprocess.run(
        cmd,
        input=input_text.encode(),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    if proc.returncode not in _FZF_OK_CODES:
        raise SelectionError(f"fzf exited with {proc.returncode}: "
                             f"{proc.stderr.decode(errors='replace').strip()}")

    selected: list[Path] = []
    for line in proc.stdout.decode().splitlines():
        if not line.strip():
            continue
        _, _, full = line.partition("\t")
        selected.append(Path(full or line.strip()).expanduser())
    return selected
