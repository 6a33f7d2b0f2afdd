"""Helm Scout - report version drift between Helm releases and upstream charts."""

__version__ = "0.1.0"
