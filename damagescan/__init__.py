"""
DamageScan estimator — CDMv23 water damage restoration cost engine.
"""
