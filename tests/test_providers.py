"""Tests for the YAML package provider."""

from __future__ import annotations

from pathlib import Path

import pytest

from pkgsite.errors import PackageNotFoundError, SiteGenerationError
from pkgsite.models import DocStatus
from pkgsite.providers import YamlPackageProvider
from tests._fixtures.package_builder import PackageBuilder


def test_describe_parses_metadata(package_builder: PackageBuilder) -> None:
    provider = package_builder.provider()
    package = provider.describe("demo")

    assert provider.package_name == "demo"
    assert package.version == "1.2.0"
    assert package.date == "2024-05-01"
    assert package.directory == package_builder.root
    assert [c.name for c in package.categories] == ["Core", "Utils"]
    assert package.categories[0].functions == ["foo", "@Bar/baz"]
    assert package.depends[0].constraint == ">= 6.1.0"
    assert package.depends[1].package == "core"
    assert package.depends[1].constraint == ""


def test_unquoted_dates_are_kept_as_iso_strings(tmp_path: Path) -> None:
    path = tmp_path / "DESCRIPTION.yml"
    path.write_text("name: demo\ndate: 2024-05-01\n", encoding="utf-8")
    assert YamlPackageProvider(path).describe("demo").date == "2024-05-01"


def test_describe_unknown_package(package_builder: PackageBuilder) -> None:
    with pytest.raises(PackageNotFoundError, match="Couldn't locate package 'other'"):
        package_builder.provider().describe("other")


def test_doc_results_are_tagged(package_builder: PackageBuilder) -> None:
    provider = package_builder.provider(functions={"foo": "Does foo.  More.", "bar": None})

    assert provider.help_text("foo").status is DocStatus.OK
    assert provider.first_sentence("foo", 200).text == "Does foo."
    assert provider.first_sentence("foo", 4).text == "Does"
    assert provider.help_text("bar").status is DocStatus.NOT_DOCUMENTED
    assert provider.first_sentence("baz", 200).status is DocStatus.NOT_FOUND


def test_invalid_description_files(tmp_path: Path) -> None:
    path = tmp_path / "DESCRIPTION.yml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(SiteGenerationError, match="mapping"):
        YamlPackageProvider(path)

    path.write_text("version: 1.0\n", encoding="utf-8")
    with pytest.raises(SiteGenerationError, match="name"):
        YamlPackageProvider(path)

    with pytest.raises(SiteGenerationError, match="Couldn't read"):
        YamlPackageProvider(tmp_path / "missing.yml")
