"""
Test installation and dependency specification for henslib.

This module verifies that the dependencies declared in setup.py and
requirements.txt are installed and consistent with each other.
"""

import os
import pytest
from importlib import metadata

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

MAIN_DEPS = ["Pyomo", "pandas", "pint"]


class TestInstallation:
    """Test pip installation functionality."""

    def test_dependencies_installed(self):
        """Test that all required dependencies are installed."""
        missing_packages = []
        for package in MAIN_DEPS:
            try:
                metadata.version(package)
            except metadata.PackageNotFoundError:
                missing_packages.append(package)

        if missing_packages:
            pytest.fail(f"Missing required packages: {missing_packages}")

    def test_henslib_installation(self):
        """Test that henslib itself is properly installed."""
        try:
            import henslib

            metadata.version("henslib")
        except metadata.PackageNotFoundError:
            pytest.skip("henslib not installed as package (development mode)")
        except ImportError:
            pytest.fail("henslib package cannot be imported")

    def test_requirements_txt_validity(self):
        """Test that requirements.txt contains valid package specifications."""
        requirements_path = os.path.join(ROOT, "requirements.txt")

        if not os.path.exists(requirements_path):
            pytest.skip("requirements.txt not found")

        with open(requirements_path, "r") as f:
            requirements = [
                req.strip()
                for req in f.read().strip().split("\n")
                if req.strip() and not req.strip().startswith("#")
            ]

        assert len(requirements) > 0, "requirements.txt is empty"
        for req in requirements:
            assert (
                ">=" in req or "==" in req or ">" in req or "<" in req
            ), f"Invalid requirement format: {req}"


class TestPipInstallation:
    """Test that setup.py and requirements.txt declare the same stack."""

    def test_setup_py_dependencies_specified(self):
        """Test that setup.py has install_requires properly specified."""
        with open(os.path.join(ROOT, "setup.py"), "r") as f:
            setup_content = f.read()

        assert "install_requires=[" in setup_content
        assert "install_requires=[]" not in setup_content
        for dep in MAIN_DEPS:
            assert dep in setup_content, f"{dep} not found in setup.py"

    def test_dependency_list_consistency(self):
        """Test that dependencies in setup.py match requirements.txt."""
        with open(os.path.join(ROOT, "requirements.txt"), "r") as f:
            requirements = [
                line.strip() for line in f if line.strip() and not line.startswith("#")
            ]
        with open(os.path.join(ROOT, "setup.py"), "r") as f:
            setup_content = f.read()

        for dep in MAIN_DEPS:
            req_found = any(dep.lower() in req.lower() for req in requirements)
            assert req_found, f"{dep} not found in requirements.txt"
            assert dep.lower() in setup_content.lower()

    def test_pip_install_scenario(self):
        """Importing henslib and running both engines works with the declared dependencies."""
        import henslib

        hot, cold, dt = henslib.build_case("yee_grossmann")
        assert henslib.solve(hot, cold, dt, method="greedy")
        assert henslib.solve(hot, cold, dt, method="cascade")


if __name__ == "__main__":
    pytest.main([__file__])
