"""Mentor API adapter package.

Architectural role:
- Defines the external interaction boundary for HTTP and CLI interfaces.
- Performs transport-level parsing and response shaping.
- Delegates validation, composition and invocation to the core layer.
"""
