"""Copy template files and directory trees into a new project."""

from __future__ import annotations

import shutil
from pathlib import Path


def copy_directory(src: str | Path, dest: str | Path) -> list[Path]:
    """Recursively copy *src* into *dest*, depth-first.

    Sub-directories are created as they are encountered and files are copied
    byte-for-byte.  Existing files in *dest* are overwritten.

    Returns:
        The destination paths of all copied files.
    """
    src_path = Path(src)
    dest_path = Path(dest)
    dest_path.mkdir(parents=True, exist_ok=True)

    copied: list[Path] = []
    for entry in sorted(src_path.iterdir()):
        target = dest_path / entry.name
        if entry.is_dir():
            copied.extend(copy_directory(entry, target))
        else:
            shutil.copyfile(entry, target)
            copied.append(target)
    return copied


def copy_static_files(
    src_dir: str | Path, dest_dir: str | Path, names: list[str]
) -> list[Path]:
    """Copy the listed top-level files that exist in *src_dir*.

    Missing files are skipped silently.
    """
    src_path = Path(src_dir)
    dest_path = Path(dest_dir)

    copied: list[Path] = []
    for name in names:
        source = src_path / name
        if source.is_file():
            target = dest_path / name
            shutil.copyfile(source, target)
            copied.append(target)
    return copied


def copy_directories(
    src_dir: str | Path, dest_dir: str | Path, names: list[str]
) -> list[Path]:
    """Copy each listed sub-directory of *src_dir* that exists."""
    src_path = Path(src_dir)
    dest_path = Path(dest_dir)

    copied: list[Path] = []
    for name in names:
        source = src_path / name
        if source.is_dir():
            copied.extend(copy_directory(source, dest_path / name))
    return copied
