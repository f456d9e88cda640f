"""Reading scene files from disk."""

from __future__ import annotations

import os
from typing import Union

from cubcaster.details import SceneDetails, fill_details
from cubcaster.validate import SceneError, check_data

PathLike = Union[str, "os.PathLike[str]"]


def valid_extension(path: PathLike) -> str:
    """Check the file name ends in ``.cub`` and has a name before it."""
    name = os.fspath(path)
    if len(name) < 5 or not name.endswith(".cub"):
        raise SceneError("Error: Wrong file name")
    return name


def read_lines(path: PathLike) -> list[str]:
    """Lines of the file, each keeping its trailing newline if it has one."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape",
                  newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise SceneError(f"open: {exc.strerror}") from exc
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def load_scene(path: PathLike) -> SceneDetails:
    """Read, validate and interpret a scene file."""
    name = valid_extension(path)
    lines = read_lines(name)
    check_data(lines)
    return fill_details(lines)