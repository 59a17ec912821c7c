"""
Regression backends.

Available backends:
    GramSchmidtBackend: CPU reference implementation using modified
        Gram-Schmidt QR and back substitution
"""

from pystepwise.regression.backends.cpu import GramSchmidtBackend

__all__ = [
    "GramSchmidtBackend",
]
