"""Tests for package annotation and README discovery."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from modmap.mapping.annotator import PackageAnnotator
from modmap.models import Comment, GroupingKind, Reflection, ReflectionKind
from modmap.project import ProjectTree


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _package(project: ProjectTree, name: str, original_name: Path | str) -> Reflection:
    return project.add(
        Reflection(
            id=project.next_id(),
            kind=ReflectionKind.MODULE,
            name=name,
            original_name=str(original_name),
        )
    )


def test_readme_in_matching_directory_becomes_comment(project: ProjectTree, tmp_path: Path) -> None:
    source = tmp_path / "packages" / "foo" / "a.ts"
    _write(source, "export const a = 1;\n")
    _write(tmp_path / "packages" / "foo" / "README.md", "# Foo\n\nThe foo package.\n")
    package = _package(project, "foo", source)

    annotated = PackageAnnotator().annotate(project, {"foo"})

    assert annotated == [package]
    assert package.comment == Comment(short_text="", text="# Foo\n\nThe foo package.\n")
    assert package.grouping is GroupingKind.PACKAGE
    assert package.kind_string == "Package"
    assert package.kind is ReflectionKind.MODULE


def test_walk_climbs_to_the_matching_ancestor(project: ProjectTree, tmp_path: Path) -> None:
    source = tmp_path / "foo" / "lib" / "deep" / "a.ts"
    _write(source, "")
    _write(tmp_path / "foo" / "README.md", "outer")
    _write(tmp_path / "foo" / "lib" / "README.md", "lib readme")
    _write(tmp_path / "foo" / "lib" / "deep" / "README.md", "deep readme")
    package = _package(project, "foo", source)

    PackageAnnotator().annotate(project, ["foo"])

    assert package.comment is not None
    assert package.comment.text == "outer"


def test_unreadable_readme_continues_walking(project: ProjectTree, tmp_path: Path) -> None:
    source = tmp_path / "foo" / "nested" / "foo" / "a.ts"
    _write(source, "")
    (tmp_path / "foo" / "nested" / "foo" / "README.md").mkdir()
    _write(tmp_path / "foo" / "README.md", "outer foo")
    package = _package(project, "foo", source)

    PackageAnnotator().annotate(project, ["foo"])

    assert package.comment is not None
    assert package.comment.text == "outer foo"


def test_missing_readme_is_logged(project: ProjectTree, tmp_path: Path, caplog) -> None:
    source = tmp_path / "packages" / "foo" / "a.ts"
    _write(source, "")
    _write(tmp_path / "packages" / "README.md", "not for foo")
    package = _package(project, "foo", source)

    with caplog.at_level(logging.INFO, logger="modmap"):
        PackageAnnotator().annotate(project, ["foo"])

    assert package.comment is None
    assert package.kind_string == "Package"
    assert 'No README found for module "foo"' in caplog.text
    assert "Expecting README for foo" in caplog.text


def test_multi_segment_names_never_match_a_directory(project: ProjectTree, tmp_path: Path, caplog) -> None:
    source = tmp_path / "packages" / "foo" / "a.ts"
    _write(source, "")
    _write(tmp_path / "packages" / "foo" / "README.md", "foo")
    package = _package(project, "packages/foo", source)

    with caplog.at_level(logging.WARNING, logger="modmap"):
        PackageAnnotator().annotate(project, ["packages/foo"])

    assert package.comment is None
    assert 'No README found for module "packages/foo"' in caplog.text


def test_reflections_without_absolute_paths_are_skipped(project: ProjectTree, caplog) -> None:
    synthetic = _package(project, "foo", "foo")

    with caplog.at_level(logging.WARNING, logger="modmap"):
        annotated = PackageAnnotator().annotate(project, ["foo", "missing"])

    assert annotated == []
    assert synthetic.grouping is GroupingKind.NONE
    assert synthetic.kind_string == "Module"
    assert caplog.text == ""


def test_first_file_backed_reflection_is_annotated(project: ProjectTree, tmp_path: Path) -> None:
    _package(project, "foo", "foo")
    real = _package(project, "foo", tmp_path / "foo" / "a.ts")
    later = _package(project, "foo", tmp_path / "other" / "foo" / "b.ts")

    PackageAnnotator().annotate(project, ["foo"])

    assert real.is_package
    assert not later.is_package


def test_custom_readme_name(project: ProjectTree, tmp_path: Path) -> None:
    source = tmp_path / "foo" / "a.ts"
    _write(source, "")
    _write(tmp_path / "foo" / "README.md", "default")
    _write(tmp_path / "foo" / "OVERVIEW.md", "custom")
    package = _package(project, "foo", source)

    PackageAnnotator(readme_name="OVERVIEW.md").annotate(project, ["foo"])

    assert package.comment is not None
    assert package.comment.text == "custom"


def test_kind_string_is_read_only(project: ProjectTree, tmp_path: Path) -> None:
    package = _package(project, "foo", tmp_path / "foo" / "a.ts")
    PackageAnnotator().annotate(project, ["foo"])

    with pytest.raises(AttributeError):
        package.kind_string = "Module"  # type: ignore[misc]
    assert package.kind_string == "Package"
