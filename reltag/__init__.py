"""reltag: release tagging helper driving the git command line."""

__version__ = "0.1.0"
