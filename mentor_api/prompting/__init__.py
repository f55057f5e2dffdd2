"""Prompting package.

Deterministic prompt construction for essay feedback: the mode -> tone table and
the template shapes built on top of it. No validation or model invocation here.
"""
