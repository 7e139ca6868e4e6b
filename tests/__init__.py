"""
Test suite for pywavenoise package.

This test suite covers:
- Import tests for all modules and submodules
- Unit tests for filters, tile generation, coefficients and CLI
- Integration tests for complete workflows
- Taichi kernel functionality tests (CPU backend)

Run with: pytest
"""
