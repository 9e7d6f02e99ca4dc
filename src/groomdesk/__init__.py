"""Groom Desk: appointments, clients, stock and weekly cash flow for a grooming shop."""

__version__ = "0.1.0"
