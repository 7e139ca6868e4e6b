"""
Pytest configuration and fixtures for pywavenoise test suite.

This file contains shared fixtures, test configuration, and utilities
used across the test suite.
"""
import os
import sys
import threading
import time

import numpy as np
import pytest


def pytest_configure(config):
    """Configure pytest with custom settings."""
    # Add the package root to Python path for testing
    package_root = os.path.dirname(os.path.dirname(__file__))
    if package_root not in sys.path:
        sys.path.insert(0, package_root)

    for marker in ("slow", "importtest", "unit", "integration"):
        config.addinivalue_line("markers", f"{marker}: {marker} tests")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers and ordering."""
    for item in items:
        # Full 128^3 tile builds take a few seconds
        if "full_tile" in item.fixturenames or "tile_build" in item.name.lower():
            item.add_marker("slow")

        # Mark import tests for easy selection
        if "import" in item.name.lower() or "test_imports.py" in str(item.fspath):
            item.add_marker("importtest")


@pytest.fixture
def skip_if_no_taichi():
    """Skip test if Taichi is not available or fails to initialize."""
    try:
        import taichi as ti
        ti.init(arch=ti.cpu, offline_cache=False)
        return True
    except Exception:
        pytest.skip("Taichi not available or initialization failed")


@pytest.fixture
def fresh_tile_state():
    """Start and end the test without a process-wide noise tile."""
    from pywavenoise.noise import reset_noise_tile

    reset_noise_tile()
    yield
    reset_noise_tile()


class BuildCounter:
    """Stand-in for build_noise_tile that counts calls and skips the filtering."""

    def __init__(self, delay=0.0):
        self.calls = 0
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self, seed=None, n=128, return_residual=False, verbose=False):
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        rs = np.random.RandomState(0 if seed is None else seed)
        return rs.standard_normal(n * n * n).astype(np.float32)


@pytest.fixture
def build_counter(monkeypatch, fresh_tile_state):
    """Replace the tile builder by a fast counting stub."""
    import pywavenoise.noise.tile as tile_module

    counter = BuildCounter()
    monkeypatch.setattr(tile_module, "build_noise_tile", counter)
    return counter


@pytest.fixture(scope="session")
def full_tile():
    """A real 128^3 tile and its residual, built once per test session."""
    import taichi as ti
    from pywavenoise.noise import build_noise_tile

    ti.init(arch=ti.cpu)
    return build_noise_tile(seed=1234, return_residual=True)


class TestDataManager:
    """Helper class for managing test data."""

    @staticmethod
    def create_impulse_grid(shape=(8, 8, 8), value=1.0):
        """Zero grid with a single impulse at the centre cell."""
        grid = np.zeros(shape, dtype=np.float32)
        grid[tuple(s // 2 for s in shape)] = value
        return grid

    @staticmethod
    def create_smooth_grid(shape=(16, 24), seed=0):
        """Smooth field plus small noise, float32."""
        rs = np.random.RandomState(seed)
        coords = np.meshgrid(*[np.linspace(0, 1, s) for s in shape], indexing="ij")
        grid = np.sin(2 * np.pi * coords[-1]) * np.cos(np.pi * coords[0])
        grid += 0.05 * rs.standard_normal(shape)
        return grid.astype(np.float32)


@pytest.fixture
def test_data_manager():
    """Provide access to test data creation utilities."""
    return TestDataManager()


@pytest.fixture
def slow_build_counter(monkeypatch, fresh_tile_state):
    """Counting stub that holds the builder long enough for callers to pile up."""
    import pywavenoise.noise.tile as tile_module

    counter = BuildCounter(delay=0.2)
    monkeypatch.setattr(tile_module, "build_noise_tile", counter)
    return counter
