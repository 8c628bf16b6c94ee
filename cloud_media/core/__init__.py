"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants, reserved path tokens, metadata keys
- exceptions: Custom exception hierarchy
"""
