"""vce CLI entry point.

This package provides a Click-based CLI that provisions the vcpkg artifacts
subsystem and delegates artifact commands to it. See `vce --help` for details.
"""
