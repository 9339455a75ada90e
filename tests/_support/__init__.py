"""
Test support utilities for typeref tests.

Entities that don't fit as pytest fixtures (classes used as the closed
set) live in ``tests._support.entities``.
"""
