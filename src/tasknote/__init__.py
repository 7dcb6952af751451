"""tasknote: a small command-line to-do list stored in a tab-delimited text file."""

__version__ = "0.1.0"
