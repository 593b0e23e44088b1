"""Workbook reading, column-role inference and row cleaning."""
