"""
Infrastructure layer - logging setup for applications using undoable.

IMPORT RULES:
- CAN import from: domain, application, config
"""
