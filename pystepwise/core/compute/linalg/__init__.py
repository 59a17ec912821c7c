"""
Dense linear algebra for pystepwise.

All routines operate on the package's own Vector and Matrix containers
(float64 buffers backed by NumPy) and implement the decompositions
explicitly rather than delegating to LAPACK:

    vector: Vector (norm, dot, scale, subtract)
    matrix: Matrix (transpose, inverse, determinant, column editing)
    lu: LU decomposition with partial pivoting (Crout)
    qr: QR decomposition via modified Gram-Schmidt, back substitution

Errors are raised immediately with clear messages.
"""

from pystepwise.core.compute.linalg.vector import Vector
from pystepwise.core.compute.linalg.matrix import Matrix
from pystepwise.core.compute.linalg.lu import (
    LUResult,
    lu_decompose,
    lu_solve,
    lu_inverse,
)
from pystepwise.core.compute.linalg.qr import (
    QRResult,
    qr_decompose,
    qr_solve,
    back_substitute,
)

__all__ = [
    "Vector",
    "Matrix",
    # LU decomposition
    "LUResult",
    "lu_decompose",
    "lu_solve",
    "lu_inverse",
    # QR decomposition
    "QRResult",
    "qr_decompose",
    "qr_solve",
    "back_substitute",
]
