"""
Application layer - services that apply configuration to the primitives.

IMPORT RULES:
- CAN import from: domain, config
- MUST NOT import from: infrastructure
"""
