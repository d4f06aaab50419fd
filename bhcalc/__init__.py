"""
bhcalc - Business hours aware pickup deadline calculator.
"""

__version__ = "0.1.0"
