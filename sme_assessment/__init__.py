"""
SME Self-Assessment Backend Application Package
"""

__version__ = "0.1.0"
