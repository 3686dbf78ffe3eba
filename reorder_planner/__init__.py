"""Reorder Planner: budget-constrained reorder lists from inventory/sales spreadsheets."""

__version__ = "0.1.0"
