"""Balanced team assignment for rated player rosters."""
