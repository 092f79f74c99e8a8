"""
PV Derating Test Suite

Tests for:
- Temperature-coefficient efficiency model
- Station report building and ranking
- Station data loading
- CSV export
- Configuration and command line runs
"""
