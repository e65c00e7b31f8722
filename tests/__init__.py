"""
Test suite for circular-geometry

Contains:
- tests/unit/          : Unit tests for ranges, values, arcs, contracts and testers
- tests/property/      : Property-based tests (hypothesis) for circular invariants
"""
