"""Screens and widgets for the legend viewer."""
