"""Exports: CSV writers for fiscal calendar lookup tables.

- writers.py: CSV emitters with fixed column schemas
"""
