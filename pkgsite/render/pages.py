"""Assembles static HTML pages from header/title/footer templates and page bodies."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from ..catalog import NOT_IMPLEMENTED
from ..config import SiteOptions
from ..fs import write_file
from ..models import Category, PackageDescription
from ..text import encode_entities

_URL_SEPARATOR = re.compile(r"[\s,]+")


@dataclass
class DependencyLink:
    label: str
    href: str
    constraint: str


class PageRenderer:
    """Renders every page of a package site.

    Each page is ``header``, body and ``footer``; the header may use ``title``.
    Fragments receive ``name`` and ``pkgroot`` (the relative path back to the
    package directory).
    """

    def __init__(self, options: SiteOptions) -> None:
        self.options = options
        self._env = self._create_env(options.templates_dir)

    # ------------------------------------------------------------------
    # Pages

    def overview(self, package: PackageDescription, categories: Sequence[Category]) -> str:
        body = self._render_body(
            "overview.html.j2",
            package=package,
            categories=categories,
            function_dir=self.options.function_dir,
            not_implemented=NOT_IMPLEMENTED,
        )
        return self._frame("overview", package.name, "", body)

    def function_page(
        self, package_name: str, function_name: str, help_text: str, *, pkgroot: str
    ) -> str:
        body = self._render_body(
            "function.html.j2",
            package_name=package_name,
            function_name=function_name,
            help_text=help_text,
            pkgroot=pkgroot,
            overview_filename=self.options.overview_filename,
        )
        return self._frame("function", function_name, pkgroot, body)

    def index_page(
        self,
        package: PackageDescription,
        *,
        manual_link: Optional[str] = None,
        has_news: bool = False,
    ) -> str:
        link_vars = {"name": package.name, "version": package.version}
        body = self._render_body(
            "index.html.j2",
            package=package,
            overview_filename=self.options.overview_filename,
            download_link=self.fragment("download_link", **link_vars).strip(),
            repository_link=self.fragment("repository_link", **link_vars).strip(),
            older_versions_download=self.fragment("older_versions_download", **link_vars).strip(),
            manual_link=manual_link,
            has_news=has_news,
            homepages=[url for url in _URL_SEPARATOR.split(package.url) if url],
            dependencies=self._dependency_links(package),
        )
        return self._frame("index", package.name, "", body)

    def news_page(self, package_name: str, content: str) -> str:
        return self._text_page("news", package_name, f"NEWS for '{package_name}' Package", content)

    def copying_page(self, package_name: str, content: str) -> str:
        return self._text_page(
            "copying", package_name, f"License for '{package_name}' Package", content
        )

    def package_list_item(self, package_name: str) -> str:
        return self.fragment("package_list_item", name=package_name)

    def write(self, path: Path, what: str, html: str) -> Path:
        return write_file(path, what, html)

    # ------------------------------------------------------------------
    # Helpers

    def fragment(self, key: str, **context: Any) -> str:
        """Render the configurable template ``key``."""
        source = self.options.template(key)
        if not source:
            return ""
        return self._env.from_string(source).render(**context)

    def _frame(self, page: str, name: str, pkgroot: str, body: str) -> str:
        context: Dict[str, Any] = {"name": name, "pkgroot": pkgroot}
        context["title"] = self.fragment(f"{page}_title", **context)
        header = self.fragment(f"{page}_header", **context)
        footer = self.fragment(f"{page}_footer", **context)
        return f"{header}\n{body}\n{footer}\n"

    def _text_page(self, page: str, package_name: str, heading: str, content: str) -> str:
        body = self._render_body(
            "text_page.html.j2", package_name=package_name, heading=heading, content=content
        )
        return self._frame(page, package_name, "", body)

    def _render_body(self, template_name: str, **context: Any) -> str:
        return self._env.get_template(template_name).render(**context)

    def _dependency_links(self, package: PackageDescription) -> List[DependencyLink]:
        links: List[DependencyLink] = []
        for dependency in package.depends:
            external = self.options.dependency_links.get(dependency.package.lower())
            href = external or f"../{dependency.package}/index.html"
            links.append(DependencyLink(dependency.package, href, dependency.constraint))
        return links

    def _create_env(self, templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )
        env.filters["entities"] = encode_entities
        return env


__all__ = ["DependencyLink", "PageRenderer"]
