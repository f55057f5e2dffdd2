"""Safety package.

Pre-generation gate deciding whether a submission may proceed to prompt
composition and provider invocation.
"""
