"""Debian AI workstation setup (Python-first, step-driven).

Core design goals:
- Idempotent steps guarded by live system state
- Fail fast on the first failed command
- Injectable system probe and command runner for testing
- Centralized logging
"""

__all__ = []
