"""CLI entrypoints for pkgsite commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import PRESETS, ConfigError, load_config
from .errors import SiteGenerationError
from .generator import SiteGenerator
from .logging import configure_logging
from .providers import YamlPackageProvider


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pkgsite",
        description="Generate static HTML documentation sites for packages.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Generate the documentation site of one or more packages.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "descriptions",
        nargs="+",
        type=Path,
        help="Package description files (YAML).",
    )
    build_parser.add_argument(
        "-o",
        "--outdir",
        type=Path,
        default=Path("htdocs"),
        help="Output root; each package gets its own subdirectory (default: htdocs).",
    )
    build_parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to .pkgsite.yml (defaults to the current directory).",
    )
    build_parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=None,
        help="Base option set applied before the configuration file.",
    )
    build_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for pkgsite commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    if args.command == "build":
        try:
            options = load_config(args.config or Path.cwd(), preset=args.preset)
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        try:
            for description in args.descriptions:
                provider = YamlPackageProvider(description)
                generator = SiteGenerator(provider, provider, options)
                result = generator.run(provider.package_name, args.outdir)
                print(
                    f"{result.package}: {len(result.written)} files written to "
                    f"{_relativize(result.package_dir)}, {len(result.warnings)} warnings"
                )
        except SiteGenerationError as exc:
            parser.exit(1, f"pkgsite build failed: {exc}\nRun with --verbose for more details.\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
