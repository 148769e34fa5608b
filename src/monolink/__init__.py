"""
monolink - monorepo dependency linking

monolink makes in-progress packages of a multi-package workspace visible to
their siblings and consumers through the host package manager's global link
registry and local dependency symlinks, and reports links whose versions no
longer satisfy what consumers declare.
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
