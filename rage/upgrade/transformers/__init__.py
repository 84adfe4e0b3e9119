"""Transformer chains for each upgrade controller."""
