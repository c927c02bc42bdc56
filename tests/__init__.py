"""
Tests Package.

This package contains test suites for the brokerage and constraint engines,
including unit tests for the graph adapters, investment and constraint
calculations, group resolution and result containers, plus integration
tests on classic networks.
"""
