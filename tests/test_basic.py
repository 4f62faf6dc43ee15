"""
Test suite for the henslib library.

This module contains tests to verify the basic functionality of henslib,
including package imports and a basic network synthesis.
"""

import pytest
import sys
import os

# Add the henslib directory to the path for testing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class TestHenslibImports:
    """Test that the henslib package and its subpackages can be imported."""

    def test_main_import(self):
        """Test that the main henslib module can be imported."""
        import henslib

        assert henslib is not None

    def test_submodule_imports(self):
        """Test that the engine subpackages can be imported."""
        import henslib.greedy
        import henslib.cascade
        import henslib.analysis

        assert callable(henslib.greedy.solve_greedy)
        assert callable(henslib.cascade.solve_cascade)


class TestBasicFunctionality:
    """Test basic functionality of henslib."""

    def test_version(self):
        """The package exposes its version."""
        import henslib

        assert henslib.__version__ is not None

    def test_pyomo_dependency(self):
        """Verify that the Pyomo dependency is available."""
        try:
            import pyomo.environ
        except ImportError:
            pytest.fail("Pyomo dependencies not available")

    @pytest.mark.parametrize("method", ["greedy", "cascade"])
    def test_basic_synthesis(self, method):
        """A single hot/cold pair far apart in temperature is matched directly."""
        import henslib

        exchangers = henslib.solve(
            [{"in": 400, "load": 100}],
            [{"in": 370, "load": 100}],
            min_approach_temp=20,
            method=method,
        )
        assert exchangers == [henslib.Exchanger(0, 0, pytest.approx(100))]

    def test_unknown_method(self):
        """An unknown engine name is rejected."""
        import henslib

        with pytest.raises(ValueError):
            henslib.solve([], [], method="simplex")

    def test_empty_problem(self):
        """No streams, no exchangers."""
        import henslib

        assert henslib.solve([], [], method="cascade") == []
        assert henslib.solve([], [], method="greedy") == []


if __name__ == "__main__":
    pytest.main([__file__])
