"""Site generation pipeline for one or more packages."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .catalog import AlphabetWriter, CatalogIndex, CatalogIndexer, FunctionKind, classify
from .catalog.indexer import NOT_DOCUMENTED
from .config import SiteOptions
from .errors import SiteGenerationError
from .fs import ensure_dir, read_text, write_file
from .logging import count_warnings, get_logger
from .manual import AssetCopier, ManualConverter
from .models import DocStatus, PackageDescription
from .providers import DocumentationProvider, PackageMetadataProvider
from .render import PageRenderer
from .serializer import MetadataValue, encode_object

DESCRIPTION_FILENAME = "description.json"
MANUAL_SUBDIR = "package_doc"
NEWS_FILENAME = "NEWS.html"
INDEX_FILENAME = "index.html"
COPYING_FILENAME = "COPYING.html"

_EXPORTED_FIELDS = ("date", "author", "maintainer", "buildrequires", "license", "url")


@dataclass
class GenerationResult:
    """Summary of the files produced for one package."""

    package: str
    package_dir: Path
    written: List[Path] = field(default_factory=list)
    not_implemented: List[str] = field(default_factory=list)
    manual_entry: Optional[Path] = None
    news_written: bool = False
    warnings: List[str] = field(default_factory=list)


class SiteGenerator:
    """Builds the documentation site of a package into an output directory."""

    def __init__(
        self,
        metadata: PackageMetadataProvider,
        docs: DocumentationProvider,
        options: SiteOptions | None = None,
        *,
        renderer: PageRenderer | None = None,
        converter: ManualConverter | None = None,
        alphabet_writer: AlphabetWriter | None = None,
    ) -> None:
        self.metadata = metadata
        self.docs = docs
        self.options = options or SiteOptions()
        self.renderer = renderer or PageRenderer(self.options)
        self.converter = converter or ManualConverter(
            self.options.makeinfo_program, extra_options=self.options.package_doc_options
        )
        self.alphabet_writer = alphabet_writer or AlphabetWriter()
        self.indexer = CatalogIndexer(docs, summary_length=self.options.summary_length)
        self.logger = get_logger("generator")

    def run(self, name: str, outdir: Path) -> GenerationResult:
        """Generate every enabled page of package ``name`` below ``outdir``.

        Warnings logged while generating are kept on ``GenerationResult.warnings``.
        """
        with count_warnings() as counter:
            result = self._generate(name, outdir)
        result.warnings = list(counter.messages)
        return result

    def _generate(self, name: str, outdir: Path) -> GenerationResult:
        package = self.metadata.describe(name)
        self.logger.info("Generating documentation for %s in %s", package.name, outdir)

        ensure_dir(outdir)
        package_dir = ensure_dir(outdir / package.name)
        result = GenerationResult(package=package.name, package_dir=package_dir)
        options = self.options

        result.written.append(self._write_description(package, package_dir))

        function_dir = ensure_dir(package_dir / options.function_dir)
        result.not_implemented = self._write_function_pages(package, function_dir, result)

        index: CatalogIndex | None = None
        if options.include_overview or options.include_alpha:
            index = self.indexer.build(package.categories, not_implemented=result.not_implemented)

        if options.include_overview and index is not None:
            html = self.renderer.overview(package, index.categories)
            result.written.append(
                self.renderer.write(package_dir / options.overview_filename, "overview file", html)
            )

        if options.include_alpha and index is not None:
            result.written.extend(self.alphabet_writer.write(index, package_dir))

        if options.include_package_list_item:
            result.written.append(
                write_file(
                    package_dir / options.pkg_list_item_filename,
                    options.pkg_list_item_filename,
                    self.renderer.package_list_item(package.name),
                )
            )

        if options.include_package_news:
            news_path = self._write_news(package, package_dir)
            if news_path is not None:
                result.written.append(news_path)
                result.news_written = True

        if options.package_doc:
            result.manual_entry = self._write_manual(package, package_dir)

        if options.include_package_page:
            manual_link = None
            if result.manual_entry is not None:
                manual_link = f"{MANUAL_SUBDIR}/{result.manual_entry.name}"
            html = self.renderer.index_page(
                package, manual_link=manual_link, has_news=result.news_written
            )
            result.written.append(
                self.renderer.write(package_dir / INDEX_FILENAME, "index file", html)
            )

        if options.include_package_license:
            result.written.append(self._write_copying(package, package_dir))

        if options.website_files:
            self._copy_website_files(options.website_files, outdir)

        self.logger.info(
            "Wrote %d files for %s (%d functions not implemented)",
            len(result.written),
            package.name,
            len(result.not_implemented),
        )
        return result

    # ------------------------------------------------------------------
    # Steps

    def _write_description(self, package: PackageDescription, package_dir: Path) -> Path:
        options = self.options
        record: Dict[str, MetadataValue] = {"name": package.name, "version": package.version}
        for name in _EXPORTED_FIELDS:
            record[name] = getattr(package, name) or ""
        record["depends"] = {dep.package: dep.constraint for dep in package.depends}
        record["has_overview"] = options.include_overview
        record["has_alphabetical_data"] = options.include_alpha
        record["has_short_description"] = options.include_package_list_item
        record["has_news"] = options.include_package_news
        record["has_package_doc"] = bool(options.package_doc)
        record["has_index"] = options.include_package_page
        record["has_license"] = options.include_package_license
        record["has_website_files"] = options.website_files is not None
        record["has_demos"] = options.include_demos
        json = encode_object(record)
        return write_file(package_dir / DESCRIPTION_FILENAME, "informational file", f"{json}\n")

    def _write_function_pages(
        self, package: PackageDescription, function_dir: Path, result: GenerationResult
    ) -> List[str]:
        not_implemented: List[str] = []
        for category in package.categories:
            for name in category.functions:
                function = classify(name)
                if function.kind is FunctionKind.CLASS_METHOD:
                    ensure_dir(function_dir / f"@{function.owner}")
                    pkgroot = "../../"
                else:
                    pkgroot = "../"

                doc = self.docs.help_text(name)
                if doc.status is DocStatus.NOT_FOUND:
                    self.logger.warning("marking '%s' as not implemented", name)
                    not_implemented.append(name)
                    continue
                help_text = doc.text if doc.status is DocStatus.OK else NOT_DOCUMENTED
                html = self.renderer.function_page(package.name, name, help_text, pkgroot=pkgroot)
                result.written.append(
                    self.renderer.write(function_dir / f"{name}.html", f"help page of {name}", html)
                )
        return not_implemented

    def _write_news(self, package: PackageDescription, package_dir: Path) -> Optional[Path]:
        source = _packinfo(package, "NEWS")
        if source is None or not source.is_file():
            self.logger.warning("couldn't open NEWS for reading; skipping %s", NEWS_FILENAME)
            return None
        try:
            content = source.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            self.logger.warning("couldn't open NEWS for reading: %s", exc.strerror or exc)
            return None
        html = self.renderer.news_page(package.name, content)
        return self.renderer.write(package_dir / NEWS_FILENAME, "NEWS file", html)

    def _write_copying(self, package: PackageDescription, package_dir: Path) -> Path:
        source = _packinfo(package, "COPYING")
        if source is None:
            raise SiteGenerationError("Couldn't open license for reading: package directory unknown")
        content = read_text(source, "license")
        html = self.renderer.copying_page(package.name, content)
        return self.renderer.write(package_dir / COPYING_FILENAME, "COPYING file", html)

    def _write_manual(self, package: PackageDescription, package_dir: Path) -> Path:
        if package.directory is None:
            raise SiteGenerationError(
                f"Cannot convert the manual of '{package.name}': package directory unknown"
            )
        doc_root = package.directory / "doc"
        source = doc_root / Path(self.options.package_doc or "").name
        out_dir = ensure_dir(package_dir / MANUAL_SUBDIR)

        entry = self.converter.convert(source, out_dir)
        self.logger.info("Converted manual %s; entry page %s", source.name, entry.name)

        copier = AssetCopier(doc_root, out_dir)
        copied = copier.copy_all(sorted(out_dir.glob("*.html")))
        self.logger.debug("Copied %d manual assets", len(copied))
        return entry

    def _copy_website_files(self, source: Path, outdir: Path) -> None:
        if not source.is_dir():
            raise SiteGenerationError(f"Website files directory {source} does not exist")
        try:
            shutil.copytree(source, outdir, dirs_exist_ok=True)
        except OSError as exc:
            raise SiteGenerationError(f"Could not copy website files from {source}: {exc}") from exc


def _packinfo(package: PackageDescription, filename: str) -> Optional[Path]:
    if package.directory is None:
        return None
    return package.directory / "packinfo" / filename


__all__ = ["GenerationResult", "SiteGenerator"]
