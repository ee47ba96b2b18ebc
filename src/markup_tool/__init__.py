"""
Markup Tool Package

Computes marked-up prices for jobs by pushing them through a fixed chain of
pricing stages: Flat → Per Person → Category → Currency Rounding.
"""

__version__ = "1.0.0"
