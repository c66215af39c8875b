"""FireSim environment bootstrap (Python-first, stage-driven).

Core design goals:
- Fail-fast ordered stages with one explicit best-effort stage
- Explicit setup context instead of ambient shell state
- env.sh written only after a complete run
- Centralized logging
"""

__all__ = []
