"""relkit - build, test and release automation for a Cargo project."""

__version__ = "0.1.0"
