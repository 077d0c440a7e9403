"""Dairy farm production tracking and monthly payment service."""

__version__ = "0.1.0"
