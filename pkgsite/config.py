"""Configuration loading for pkgsite (.pkgsite.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".pkgsite.yml"

DEFAULT_HEADER = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <link rel="stylesheet" type="text/css" href="{{ pkgroot }}../site.css">
</head>
<body>
<div id="doccontent">"""

DEFAULT_FOOTER = """</div>
</body>
</html>"""

# Keys of the ``templates`` mapping; ``<page>_header`` etc. fall back to the
# generic ``header``/``title``/``footer`` entries.
PAGES = ("overview", "function", "index", "news", "copying")

DEFAULT_TEMPLATES: Dict[str, str] = {
    "header": DEFAULT_HEADER,
    "footer": DEFAULT_FOOTER,
    "title": "The '{{ name }}' package",
    "overview_title": "List of functions in the '{{ name }}' package",
    "function_title": "Function Reference: {{ name }}",
    "news_title": "NEWS for the '{{ name }}' package",
    "copying_title": "License for the '{{ name }}' package",
    "package_list_item": (
        '<div class="package">\n'
        '  <b><a href="{{ name }}/index.html">{{ name }}</a></b>\n'
        "</div>\n"
    ),
    "download_link": "",
    "repository_link": "",
    "older_versions_download": "",
}

DEFAULT_DEPENDENCY_LINKS: Dict[str, str] = {"octave": "https://www.octave.org"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SiteOptions:
    """Resolved options steering which pages are generated and how they look."""

    function_dir: str = "function"
    overview_filename: str = "overview.html"
    include_overview: bool = True
    include_alpha: bool = True
    include_package_list_item: bool = True
    pkg_list_item_filename: str = "short_package_description"
    include_package_news: bool = True
    include_package_page: bool = True
    include_package_license: bool = True
    include_demos: bool = False
    package_doc: Optional[str] = None
    package_doc_options: Optional[str] = None
    website_files: Optional[Path] = None
    makeinfo_program: str = "makeinfo"
    summary_length: int = 200
    templates_dir: Optional[Path] = None
    # user overrides only; built-in sources live in DEFAULT_TEMPLATES
    templates: Dict[str, str] = field(default_factory=dict)
    # dependencies linked to an external site instead of a sibling package page
    dependency_links: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_DEPENDENCY_LINKS))

    def __post_init__(self) -> None:
        self.overview_filename = self.overview_filename.replace(" ", "_")

    def template(self, key: str) -> str:
        """Template source for ``key``.

        User overrides win over built-ins; within each, ``<page>_<part>`` wins
        over the generic ``<part>``.
        """
        page, _, part = key.partition("_")
        generic = part if page in PAGES else None
        for source in (self.templates, DEFAULT_TEMPLATES):
            if key in source:
                return source[key]
            if generic and generic in source:
                return source[generic]
        return ""


PRESETS: Dict[str, Dict[str, Any]] = {
    "default": {},
    "minimal": {
        "include_alpha": False,
        "include_package_list_item": False,
        "include_package_news": False,
        "include_package_page": False,
        "include_package_license": False,
    },
}


def preset_options(name: str) -> SiteOptions:
    if name not in PRESETS:
        raise ConfigError(f"Unknown preset '{name}'; choose one of {', '.join(sorted(PRESETS))}")
    return SiteOptions(**PRESETS[name])


def load_config(config_path: Path, *, preset: Optional[str] = None) -> SiteOptions:
    """Load options from disk.

    A directory without a configuration file yields the preset's defaults; an
    explicit file path that does not exist is an error.
    """
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    data: Dict[str, Any] = {}
    if config_file.exists():
        data = _read_config(config_file)
    elif not config_path.expanduser().is_dir():
        raise ConfigError(f"Configuration file {config_path} does not exist")

    preset_name = preset or _as_str(data.get("preset")) or "default"
    options = preset_options(preset_name)

    updates: Dict[str, Any] = {}
    for option in fields(SiteOptions):
        if option.name in ("templates", "templates_dir", "website_files", "dependency_links"):
            continue
        if option.name not in data or data[option.name] is None:
            continue
        value = data[option.name]
        current = getattr(options, option.name)
        if isinstance(current, bool):
            parsed = _as_bool(value)
            if parsed is None:
                raise ConfigError(f"Option '{option.name}' must be a boolean")
            updates[option.name] = parsed
        elif option.name == "summary_length":
            parsed_int = _as_int(value)
            if parsed_int is None or parsed_int < 0:
                raise ConfigError("Option 'summary_length' must be a non-negative integer")
            updates[option.name] = parsed_int
        else:
            updates[option.name] = _as_str(value)

    for key in ("templates_dir", "website_files"):
        value = _as_str(data.get(key))
        if value:
            updates[key] = (root / value).resolve()

    templates_data = data.get("templates")
    if templates_data is not None:
        if not isinstance(templates_data, dict):
            raise ConfigError("'templates' must be a mapping of template names to strings")
        templates = dict(options.templates)
        for key, value in templates_data.items():
            templates[str(key)] = "" if value is None else str(value)
        updates["templates"] = templates

    links_data = data.get("dependency_links")
    if links_data is not None:
        if not isinstance(links_data, dict):
            raise ConfigError("'dependency_links' must map package names to URLs")
        links = dict(options.dependency_links)
        links.update((str(key).lower(), str(value)) for key, value in links_data.items())
        updates["dependency_links"] = links

    return replace(options, **updates)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Couldn't read {path}: {exc.strerror or exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_TEMPLATES",
    "PRESETS",
    "SiteOptions",
    "load_config",
    "preset_options",
]
