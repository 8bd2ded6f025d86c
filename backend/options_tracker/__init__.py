"""
Options Tracker
Manual options trade log with annualized return (APR) calculation
"""

__version__ = "1.0.0"
