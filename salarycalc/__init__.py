"""Salary Calc - Portuguese net salary and withholding estimates."""

__version__ = "0.3.0"
