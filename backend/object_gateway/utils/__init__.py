"""
Utility modules (logging, metrics).
"""
