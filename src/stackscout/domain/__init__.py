"""Domain layer — typed records exchanged across the action boundary.

No I/O here; the infrastructure and service layers build on these types.
"""
