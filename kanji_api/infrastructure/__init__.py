"""Infrastructure Layer — database handle, upstream HTTP client, logging setup.

Invariants:
    - Infrastructure failures are mapped to core/errors.py types before leaving this layer
    - No retries: every external call is attempted exactly once
"""
