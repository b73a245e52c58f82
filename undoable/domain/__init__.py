"""
Domain layer - the action/rollback primitives.

This layer contains:
- Reversible actions and their state machine
- The unwind stack and chain runners
- Domain exceptions

CRITICAL: This layer must NOT import from config or infrastructure.
Only stdlib, typing and structlog imports are allowed.
"""
