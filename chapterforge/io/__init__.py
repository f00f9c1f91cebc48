"""Container input and export output components.

This package contains the zip container reader, the package, navigation and
lexicon parsers, and the export artifact store.
"""

from .container import ContainerReader
from .lexicon import LexiconParser
from .navigation import NavigationParser
from .package import PackageDescriptorParser
from .storage import ArtifactStore

__all__ = [
    "ArtifactStore",
    "ContainerReader",
    "LexiconParser",
    "NavigationParser",
    "PackageDescriptorParser",
]
