"""Tax Calc - Indian income tax computation under the old and new regimes."""

__version__ = "0.3.0"
