"""Ozza account membership and invitation core."""
