"""
Personal Ledger - Source Package

An in-memory personal finance ledger that records transactions and
refuses any that would push a category past its budget.

DESIGN PRINCIPLES:
1. Check before you write: a refused transaction changes nothing
2. Fail early, fail visibly
3. Every change is auditable
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Ledger Team"
