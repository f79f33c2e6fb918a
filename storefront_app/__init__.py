"""
Storefront App - Purchase State and Catalog Synchronization Engine

Loads product catalog sections from JSON endpoints, keeps rendered card state
in step with the set of unlocked items, and drives the per-item unlock flow
through a simulated payment.
"""

__version__ = "0.1.0"
__author__ = "Storefront Team"
