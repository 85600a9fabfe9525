"""Pizzaria catalog service: pizzas and beverages over HTTP."""

__version__ = "1.0.0"
