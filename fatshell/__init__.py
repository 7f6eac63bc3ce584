"""An interactive shell and a small FAT-style file system kept in one disk image."""

__version__ = "0.1.0"
__all__ = ["__version__"]