"""
Deterministic calculation engine.

Pure Python math. No I/O.
Given a validated room assessment, a rate snapshot and the material library,
produce equipment sizing, costs, a drying timeline and the electrical load.
"""
