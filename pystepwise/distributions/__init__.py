"""
Reference distributions for significance testing.

Public API:
    StudentTTable   - tabulated t critical values and two-sided p-values
    Alpha           - tabulated two-sided significance levels
    default_table() - shared StudentTTable instance

Any object implementing pystepwise.core.protocols.DistributionTables can
be passed to the regression and stepwise functions instead.
"""

from pystepwise.distributions._common import Alpha
from pystepwise.distributions.student_t import StudentTTable, default_table

__all__ = [
    "Alpha",
    "StudentTTable",
    "default_table",
]
