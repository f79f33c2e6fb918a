"""
Configuration module.

Typed defaults, YAML overrides and validation for catalog sections,
the simulated payment, notifications and persistence.
"""
