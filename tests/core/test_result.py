"""
Tests for the Result[P] envelope.

Validates:
    - Generic type parameter works with arbitrary payload types
    - Frozen immutability
    - Default warnings factory
    - has_warning() method
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pystepwise.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


class TestResultConstruction:

    def test_fields(self):
        result = Result(
            params=FakeParams(value=1.5),
            info={'method': 'test'},
            timing={'total_seconds': 0.01},
            backend_name='cpu_test',
        )
        assert result.params.value == 1.5
        assert result.info['method'] == 'test'
        assert result.timing == {'total_seconds': 0.01}
        assert result.backend_name == 'cpu_test'

    def test_warnings_default_empty(self):
        result = Result(params=FakeParams(0.0), info={}, timing=None, backend_name='x')
        assert result.warnings == ()

    def test_timing_optional(self):
        result = Result(params=FakeParams(0.0), info={}, timing=None, backend_name='x')
        assert result.timing is None

    def test_frozen(self):
        result = Result(params=FakeParams(0.0), info={}, timing=None, backend_name='x')
        with pytest.raises(FrozenInstanceError):
            result.backend_name = 'other'


class TestHasWarning:

    def test_substring_match(self):
        result = Result(
            params=FakeParams(0.0),
            info={},
            timing=None,
            backend_name='x',
            warnings=("no residual degrees of freedom: exactly determined",),
        )
        assert result.has_warning("residual degrees")
        assert not result.has_warning("perfect fit")

    def test_no_warnings(self):
        result = Result(params=FakeParams(0.0), info={}, timing=None, backend_name='x')
        assert not result.has_warning("anything")
