"""Tests for pkgsite.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from pkgsite.config import DEFAULT_TEMPLATES, ConfigError, SiteOptions, load_config
from pkgsite.models import PackageDescription
from pkgsite.render import PageRenderer


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    options = load_config(tmp_path)

    assert isinstance(options, SiteOptions)
    assert options.function_dir == "function"
    assert options.overview_filename == "overview.html"
    assert options.include_overview is True
    assert options.include_alpha is True
    assert options.package_doc is None
    assert options.website_files is None
    assert options.summary_length == 200


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / "site").mkdir()
    config_file = tmp_path / ".pkgsite.yml"
    config_file.write_text(
        """
overview_filename: "all functions.html"
include_alpha: no
include_demos: true
package_doc: manual.texi
package_doc_options: "--no-split"
summary_length: 80
website_files: site
templates:
  header: "<header>{{ title }}</header>"
  download_link: "https://downloads.example.com/{{ name }}-{{ version }}.tar.gz"
dependency_links:
  Octave: https://octave.org
""",
        encoding="utf-8",
    )

    options = load_config(config_file)

    assert options.overview_filename == "all_functions.html"
    assert options.include_alpha is False
    assert options.include_demos is True
    assert options.package_doc == "manual.texi"
    assert options.package_doc_options == "--no-split"
    assert options.summary_length == 80
    assert options.website_files == (tmp_path / "site").resolve()
    assert options.template("header") == "<header>{{ title }}</header>"
    assert options.template("overview_header") == "<header>{{ title }}</header>"
    assert options.template("footer").startswith("</div>")
    assert options.dependency_links == {"octave": "https://octave.org"}


def test_preset_applies_before_file_values(tmp_path: Path) -> None:
    (tmp_path / ".pkgsite.yml").write_text("preset: minimal\ninclude_package_news: true\n", encoding="utf-8")

    options = load_config(tmp_path)

    assert options.include_alpha is False
    assert options.include_package_page is False
    assert options.include_package_news is True


def test_preset_argument_overrides_file_preset(tmp_path: Path) -> None:
    (tmp_path / ".pkgsite.yml").write_text("preset: minimal\n", encoding="utf-8")
    assert load_config(tmp_path, preset="default").include_alpha is True


@pytest.mark.parametrize(
    "content, message",
    [
        ("- a\n- b\n", "mapping at the root"),
        ("include_alpha: maybe\n", "boolean"),
        ("summary_length: -3\n", "summary_length"),
        ("templates: [a, b]\n", "templates"),
        ("preset: fancy\n", "Unknown preset"),
        ("key: [unclosed\n", "Failed to parse"),
    ],
)
def test_load_config_rejects_invalid_files(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / ".pkgsite.yml").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)


def test_generic_title_override_reaches_every_page(tmp_path: Path) -> None:
    (tmp_path / ".pkgsite.yml").write_text(
        'templates:\n  title: "Custom {{ name }}"\n  news_title: "News of {{ name }}"\n',
        encoding="utf-8",
    )
    renderer = PageRenderer(load_config(tmp_path))
    package = PackageDescription(name="demo", version="1.0.0")

    assert "<title>Custom demo</title>" in renderer.index_page(package)
    assert "<title>Custom demo</title>" in renderer.overview(package, [])
    assert "<title>Custom demo</title>" in renderer.copying_page("demo", "GPL")
    assert "<title>News of demo</title>" in renderer.news_page("demo", "news")


def test_builtin_page_titles_apply_without_overrides() -> None:
    options = SiteOptions()
    assert options.template("overview_title") == DEFAULT_TEMPLATES["overview_title"]
    assert options.template("index_title") == DEFAULT_TEMPLATES["title"]
    assert options.template("news_header") == DEFAULT_TEMPLATES["header"]
    assert options.template("unknown") == ""


def test_dependency_links_extend_builtin_links(tmp_path: Path) -> None:
    (tmp_path / ".pkgsite.yml").write_text(
        "dependency_links:\n  Signal: https://signal.example.com\n", encoding="utf-8"
    )

    options = load_config(tmp_path)

    assert options.dependency_links == {
        "octave": "https://www.octave.org",
        "signal": "https://signal.example.com",
    }


def test_explicit_missing_config_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(tmp_path / "typo.yml")


def test_unreadable_config_file_is_reported(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".pkgsite.yml").write_text("include_alpha: true\n", encoding="utf-8")

    def _deny(self: Path, *args, **kwargs) -> str:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(Path, "read_text", _deny)

    with pytest.raises(ConfigError, match="Couldn't read .*Permission denied"):
        load_config(tmp_path)
