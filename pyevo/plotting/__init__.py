"""Plots of optimization runs."""
