"""JSON reading and writing of reflection trees for the CLI."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .models import Comment, Reflection, ReflectionKind
from .project import ProjectTree

_FORMAT_VERSION = 1


class TreeFormatError(ValueError):
    """Raised when a tree document is malformed."""


@dataclass
class Declaration:
    """A reflection as the host creates it, with its parent and source file."""

    reflection: Reflection
    parent: Optional[int]
    file_name: Optional[str]


def load_declarations(path: Path) -> Tuple[str, List[Declaration]]:
    """Read a tree document from ``path``; returns the project name and declarations."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except (OSError, json.JSONDecodeError) as exc:
        raise TreeFormatError(f"Failed to read tree document {path}: {exc}") from exc
    return parse_document(data)


def parse_document(data: object) -> Tuple[str, List[Declaration]]:
    if not isinstance(data, dict):
        raise TreeFormatError("Tree document must be a JSON object")
    name = data.get("name") if isinstance(data.get("name"), str) else "project"
    entries = data.get("reflections")
    if not isinstance(entries, list):
        raise TreeFormatError("Tree document requires a 'reflections' list")

    declarations: List[Declaration] = []
    seen: set[int] = {0}
    for index, raw in enumerate(entries):
        declaration = _declaration_from_dict(raw, index)
        reflection_id = declaration.reflection.id
        if reflection_id in seen:
            raise TreeFormatError(f"Duplicate reflection id {reflection_id}")
        if declaration.parent is not None and declaration.parent not in seen:
            raise TreeFormatError(
                f"Reflection {reflection_id} references parent {declaration.parent} before it is declared"
            )
        seen.add(reflection_id)
        declarations.append(declaration)
    return name, declarations


def dump_tree(project: ProjectTree) -> Dict[str, Any]:
    """Return a JSON-ready description of every live reflection."""
    return {
        "version": _FORMAT_VERSION,
        "name": project.root.name,
        "reflections": [_reflection_to_dict(reflection) for reflection in project.reflections()],
    }


def write_tree(project: ProjectTree, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(dump_tree(project), indent=2) + "\n", encoding="utf-8")


def _declaration_from_dict(payload: object, index: int) -> Declaration:
    if not isinstance(payload, dict):
        raise TreeFormatError(f"Reflection entry {index} must be an object")

    reflection_id = payload.get("id")
    if not isinstance(reflection_id, int) or isinstance(reflection_id, bool) or reflection_id <= 0:
        raise TreeFormatError(f"Reflection entry {index} needs a positive integer 'id'")

    kind_value = payload.get("kind")
    try:
        kind = ReflectionKind(kind_value)
    except ValueError as exc:
        raise TreeFormatError(f"Reflection {reflection_id} has unknown kind {kind_value!r}") from exc
    if kind is ReflectionKind.PROJECT:
        raise TreeFormatError(f"Reflection {reflection_id} cannot be a second project")

    name = payload.get("name")
    if not isinstance(name, str):
        raise TreeFormatError(f"Reflection {reflection_id} needs a string 'name'")

    parent = payload.get("parent")
    if parent is not None and (not isinstance(parent, int) or isinstance(parent, bool)):
        raise TreeFormatError(f"Reflection {reflection_id} has a non-integer parent")

    original_name = payload.get("original_name")
    file_name = payload.get("file_name")

    reflection = Reflection(
        id=reflection_id,
        kind=kind,
        name=name,
        original_name=original_name if isinstance(original_name, str) else name,
        comment=_comment_from_payload(payload.get("comment")),
    )
    return Declaration(
        reflection=reflection,
        parent=parent if parent != 0 else None,
        file_name=file_name if isinstance(file_name, str) else None,
    )


def _comment_from_payload(payload: object) -> Optional[Comment]:
    if isinstance(payload, str):
        return Comment(short_text=payload)
    if isinstance(payload, dict):
        short_text = payload.get("short_text")
        text = payload.get("text")
        return Comment(
            short_text=short_text if isinstance(short_text, str) else "",
            text=text if isinstance(text, str) else "",
        )
    return None


def _reflection_to_dict(reflection: Reflection) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": reflection.id,
        "kind": reflection.kind.value,
        "kind_string": reflection.kind_string,
        "name": reflection.name,
        "original_name": reflection.original_name,
        "parent": reflection.parent,
        "children": list(reflection.children or []),
    }
    if reflection.comment is not None:
        data["comment"] = {
            "short_text": reflection.comment.short_text,
            "text": reflection.comment.text,
        }
    return data


__all__ = [
    "Declaration",
    "TreeFormatError",
    "dump_tree",
    "load_declarations",
    "parse_document",
    "write_tree",
]
