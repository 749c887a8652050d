# fincalc/__init__.py
"""
fincalc: solvers for simple and compound interest and a bank-credit
amortization table builder (French and German systems).
"""

__version__ = "0.1.0"
