"""
Numerical tolerances.

Two kinds of constants live here:
- Algorithm thresholds used by the decompositions and the engine
  (rank detection in Gram-Schmidt, default significance level).
- Tolerance tiers describing how closely results are expected to match
  a reference, used by the test suite.
"""

from dataclasses import dataclass


# Relative norm below which an orthogonalized column is treated as a
# linear combination of the previous ones: column j is rejected when
# ||u|| <= GRAM_SCHMIDT_RANK_TOL * ||x_j||.
GRAM_SCHMIDT_RANK_TOL = 1e-10

# Significance level used when the caller does not pass one.
DEFAULT_ALPHA = 0.05

# SSe at or below this fraction of y'y is rounding noise from the
# hat-matrix products and is reported as a perfect fit.
PERFECT_FIT_RTOL = 1e-12


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Exact reconstruction identities (QR, LU, inverse) on small matrices
EXACT = ToleranceTier(
    rtol=1e-12,
    atol=1e-9,
    name='exact',
    description='Factorization identities on well-conditioned input',
)

# Comparison against LAPACK/scipy reference results
CPU_FP64 = ToleranceTier(
    rtol=1e-8,
    atol=1e-10,
    name='cpu_fp64',
    description='Double precision, matches LAPACK reference',
)

# Classical/modified Gram-Schmidt loses orthogonality as cond(X) grows
ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='ill_conditioned',
    description='Double precision, ill-conditioned (cond > 1e4)',
)

