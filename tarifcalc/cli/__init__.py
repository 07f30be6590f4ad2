"""Tarif Calc command-line interface."""
