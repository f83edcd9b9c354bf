"""Kanji API Package — REST service over a kanji collection plus a dictionary search proxy.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
