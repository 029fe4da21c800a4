"""Built-in scmfilter plugins."""
