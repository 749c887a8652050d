# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_inputs, make_credit_inputs
"""

from .utils import make_compound_inputs, make_credit_inputs, make_inputs

__all__ = ["make_inputs", "make_compound_inputs", "make_credit_inputs"]
