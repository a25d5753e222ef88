"""Calibration graphs and the files that store them.

A calibration file is a JSON document holding a tree of directories; a
location is written ``path/to/file.json:Dir/SubDir``.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

FILE_SUFFIX = ".json"
SEARCH_PATH_VARIABLE = "FW_SEARCH_PATH"

_DIRECTORY = "directory"
_GRAPH = "graph_errors"


class CalibrationFileError(Exception):
    """Raised when calibration information cannot be read or written."""


@dataclass(frozen=True)
class CalibrationGraph:
    """A named set of points with symmetric errors on both coordinates."""

    name: str
    x: tuple[float, ...]
    y: tuple[float, ...]
    ex: tuple[float, ...] = ()
    ey: tuple[float, ...] = ()
    title: str = ""

    def __post_init__(self) -> None:
        size = len(self.x)
        coords = {"x": self.x, "y": self.y, "ex": self.ex or (0.0,) * size,
                  "ey": self.ey or (0.0,) * size}
        for label, values in coords.items():
            values = tuple(float(v) for v in values)
            if len(values) != size:
                raise ValueError(
                    f"graph '{self.name}': '{label}' has {len(values)} values, "
                    f"expected {size}"
                )
            object.__setattr__(self, label, values)

    def __len__(self) -> int:
        return len(self.x)


def _graph_to_json(graph: CalibrationGraph) -> dict[str, Any]:
    return {
        "type": _GRAPH,
        "title": graph.title,
        "x": list(graph.x),
        "y": list(graph.y),
        "ex": list(graph.ex),
        "ey": list(graph.ey),
    }


def _graph_from_json(name: str, entry: Mapping[str, Any]) -> CalibrationGraph:
    try:
        return CalibrationGraph(
            name=name,
            x=entry["x"],
            y=entry["y"],
            ex=entry.get("ex", ()),
            ey=entry.get("ey", ()),
            title=entry.get("title", ""),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise CalibrationFileError(f"malformed graph '{name}': {exc}") from exc


class _CalibrationDirectory:
    """A directory of objects read from a calibration file."""

    def __init__(self, path: str, entries: Mapping[str, Any]) -> None:
        self.path = path
        self._entries = dict(entries)

    def names(self) -> list[str]:
        return list(self._entries)

    def graph(self, name: str) -> CalibrationGraph:
        """Return the named graph; raise if missing or of another type."""
        entry = self._entries.get(name)
        if entry is None:
            raise CalibrationFileError(
                f"No object '{name}' in directory '{self.path}'"
            )
        kind = entry.get("type") if isinstance(entry, Mapping) else type(entry).__name__
        if kind != _GRAPH:
            raise CalibrationFileError(
                f"Object '{name}' in directory '{self.path}' is a {kind}, "
                f"not derived from {_GRAPH}"
            )
        return _graph_from_json(name, entry)


def split_calibration_path(path: str) -> tuple[str, str]:
    """Split ``file.json:dir/dir`` into file path and directory path.

    The file part is the last occurrence of the suffix followed by ``/``,
    ``:`` or the end of the string. Without one, both parts are empty.
    """
    search_end = len(path)
    while True:
        index = path.rfind(FILE_SUFFIX, 0, search_end)
        if index < 0:
            return "", ""
        after = index + len(FILE_SUFFIX)
        if after < len(path) and path[after] not in "/:":
            if index == 0:
                return "", ""
            search_end = index - 1 + len(FILE_SUFFIX)
            continue
        return path[:after], path[after + 1 :]


def verify_order(graph: CalibrationGraph | None) -> None:
    """Check that the graph points have non-decreasing abscissa."""
    if graph is None:
        raise CalibrationFileError("VerifyOrder(): invalid graph specified")
    if any(right < left for left, right in zip(graph.x, graph.x[1:])):
        raise CalibrationFileError(
            f"VerifyOrder(): points in graph '{graph.name}' are not sorted in abscissa"
        )


def _search_directories(search_path: str | Sequence[str] | None) -> list[str]:
    if search_path is None:
        search_path = os.environ.get(SEARCH_PATH_VARIABLE, "")
    if isinstance(search_path, str):
        return [part for part in search_path.split(os.pathsep) if part]
    return [str(part) for part in search_path if part]


def find_file(file_path: str, search_path: str | Sequence[str] | None = None) -> str:
    """Locate a file in the search path, falling back to the path itself.

    ``search_path`` is a list of directories or a string of them joined by the
    path separator; by default it comes from ``FW_SEARCH_PATH``.
    """
    if not file_path:
        return file_path
    if os.path.isabs(file_path):
        return file_path
    for directory in _search_directories(search_path):
        candidate = os.path.join(directory, file_path)
        if os.path.isfile(candidate):
            return candidate
    return file_path


def _load_tree(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as stream:
        tree = json.load(stream)
    if not isinstance(tree, dict) or tree.get("type") != _DIRECTORY:
        raise ValueError("top level is not a directory")
    tree.setdefault("entries", {})
    return tree


def _dir_parts(dir_path: str) -> list[str]:
    return [part for part in dir_path.split("/") if part]


def read_calibration_directory(
    path: str, search_path: str | Sequence[str] | None = None
) -> _CalibrationDirectory:
    """Open the directory at ``file.json:dir/dir`` and return its content."""
    file_path, dir_path = split_calibration_path(path)
    full_path = find_file(file_path, search_path)
    try:
        tree = _load_tree(full_path)
    except (OSError, ValueError) as exc:
        raise CalibrationFileError(
            f"can't read '{full_path}' (from '{file_path}' specification): {exc}"
        ) from exc

    node: Any = tree
    for part in _dir_parts(dir_path):
        entries = node.get("entries", {})
        child = entries.get(part)
        if not isinstance(child, Mapping) or child.get("type") != _DIRECTORY:
            raise CalibrationFileError(
                f"can't find '{dir_path}' in calibration file '{full_path}'"
            )
        node = child
    location = f"{full_path}:{dir_path}" if dir_path else full_path
    return _CalibrationDirectory(location, node.get("entries", {}))


def write_calibration_directory(path: str, graphs: Iterable[CalibrationGraph]) -> Path:
    """Write graphs into ``file.json:dir/dir``, updating an existing file.

    Missing parent directories and nested directories are created. Returns
    the path of the written file.
    """
    file_path, dir_path = split_calibration_path(path)
    if not file_path:
        raise CalibrationFileError(f"can't create calibration directory '{path}'")
    target = Path(file_path)
    if target.parent != Path(""):
        target.parent.mkdir(parents=True, exist_ok=True)

    if target.exists():
        try:
            tree = _load_tree(str(target))
        except (OSError, ValueError) as exc:
            raise CalibrationFileError(f"can't update '{target}': {exc}") from exc
    else:
        tree = {"type": _DIRECTORY, "entries": {}}

    node = tree
    for part in _dir_parts(dir_path):
        entries = node.setdefault("entries", {})
        child = entries.setdefault(part, {"type": _DIRECTORY, "entries": {}})
        if not isinstance(child, dict) or child.get("type") != _DIRECTORY:
            raise CalibrationFileError(
                f"'{part}' in '{target}' exists and is not a directory"
            )
        node = child

    entries = node.setdefault("entries", {})
    for graph in graphs:
        entries[graph.name] = _graph_to_json(graph)

    try:
        with open(target, "w", encoding="utf-8") as stream:
            json.dump(tree, stream, indent=2)
    except OSError as exc:
        raise CalibrationFileError(f"can't write '{target}': {exc}") from exc
    return target