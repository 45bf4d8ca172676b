"""Tabular (CSV / Excel) input reader."""
