"""macsetup — Homebrew bootstrap and package install pass for macOS."""

__version__ = "0.1.0"
