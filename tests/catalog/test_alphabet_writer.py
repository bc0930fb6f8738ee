"""Tests for the alphabetical index files."""

from __future__ import annotations

from pathlib import Path

from pkgsite.catalog import LETTERS, AlphabetWriter, CatalogIndexer
from pkgsite.models import CategorySpec, DocResult


class SentenceDocs:
    def help_text(self, name: str) -> DocResult:
        return DocResult.found(f"About {name}.")

    def first_sentence(self, name: str, max_length: int) -> DocResult:
        return DocResult.found(f"About {name}."[:max_length])


def _write(tmp_path: Path, categories: list[CategorySpec]) -> Path:
    index = CatalogIndexer(SentenceDocs()).build(categories)
    directory = tmp_path / "demo"
    AlphabetWriter().write(index, directory)
    return directory


def test_every_letter_file_exists_even_when_empty(tmp_path: Path) -> None:
    directory = _write(tmp_path, [])

    for letter in LETTERS:
        assert (directory / f"function_names_{letter}").read_text(encoding="utf-8") == ""
        assert (directory / f"function_descriptions_{letter}").read_text(encoding="utf-8") == ""
    assert (directory / "classes").is_dir()
    assert (directory / "namespaces").is_dir()
    assert list((directory / "classes").iterdir()) == []


def test_function_lists_are_sorted_and_parallel(tmp_path: Path) -> None:
    directory = _write(tmp_path, [CategorySpec("Core", ["foo", "fab"]), CategorySpec("More", ["bar"])])

    assert (directory / "function_names_f").read_text(encoding="utf-8") == "fab\nfoo\n"
    assert (
        directory / "function_descriptions_f"
    ).read_text(encoding="utf-8") == "About fab.\nAbout foo.\n"
    assert (directory / "function_names_b").read_text(encoding="utf-8") == "bar\n"


def test_class_and_namespace_trees(tmp_path: Path) -> None:
    directory = _write(
        tmp_path, [CategorySpec("Core", ["foo", "@Bar/baz"]), CategorySpec("Utils", ["ns.qux"])]
    )

    method = directory / "classes" / "class_names_b" / "Bar" / "baz"
    assert method.read_text(encoding="utf-8") == "About @Bar/baz.\n"
    function = directory / "namespaces" / "namespace_names_n" / "ns" / "qux"
    assert function.read_text(encoding="utf-8") == "About ns.qux.\n"
    assert not (directory / "classes" / "class_names_f").exists()
    assert (directory / "function_names_b").read_text(encoding="utf-8") == ""
