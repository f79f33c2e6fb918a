"""
Presentation module.

Headless view models for catalog cards, section regions, the purchases
summary, overlays and the transient toast, plus the reconciliation logic
that keeps them in step with unlock state.
"""
