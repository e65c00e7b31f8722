"""
Core domain models, mathematical primitives, and contracts.

Range descriptors, circular values, arc lengths and arcs, the numerical
safeguards they rely on, and JSON Schema validation of their wire payloads.
"""
