"""Core — pure domain logic and boundary contracts.

Invariants:
    - Nothing in core performs IO or imports from services/infrastructure
    - Money rules (settlement, exposure caps) live here so they are testable without a DB
"""
