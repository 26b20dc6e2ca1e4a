"""Personal recipe box: recipe types and the grocery-list engine."""

__version__ = "0.1.0"
