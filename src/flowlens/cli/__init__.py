"""flowlens command line interface."""
