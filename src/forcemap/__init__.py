"""forcemap — force-directed dependency graph layout with neighborhood filtering."""

__version__ = "0.3.0"
