"""Tarif Calc - Tariff-versioned monthly pay calculation for hospital physicians."""

__version__ = "0.1.0"
