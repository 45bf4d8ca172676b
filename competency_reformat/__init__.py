"""Competency framework reformatter.

Turns two-row-header competency framework files (CSV / XLS / XLSX) into the
hierarchical 14-column CSV expected by competency-management bulk import.
"""

__version__ = "0.1.0"
