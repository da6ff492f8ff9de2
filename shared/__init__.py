"""
Shared Kernel

Building blocks used by every booking context: value objects, the unit of
work that scopes storage transactions, and the form validation helpers.
"""
