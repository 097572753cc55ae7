"""
Tests for the per-kind comparison algorithms.

Each module exercises one algorithm directly (compare_floats, compare_strings,
compare_mappings, compare_objects, compare_handles) and through compare().
"""
