"""Static HTML documentation sites for packages."""

from .config import SiteOptions, load_config
from .generator import GenerationResult, SiteGenerator
from .providers import YamlPackageProvider

__version__ = "0.3.0"

__all__ = [
    "GenerationResult",
    "SiteGenerator",
    "SiteOptions",
    "YamlPackageProvider",
    "load_config",
]
