"""
Rental Manager - Source Package

A single-user bookkeeping tool for landlords: properties, tenants, rent,
monthly utility expenses, dashboard statistics and monthly reports.

DESIGN PRINCIPLES:
1. One store owns all state and persists after every change
2. Validate what users type; never silently rewrite imported data
3. Derived figures are recomputed, never cached
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Rental Manager Team"
