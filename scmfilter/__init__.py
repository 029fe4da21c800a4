"""scmfilter - prefilters for SCM indexing hosts."""

__version__ = "0.5.0"
