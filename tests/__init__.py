"""Test suite for schemagate.

This package contains tests for:
- Dot-path helpers (lookup, immutable writes, blankness)
- Schema model, builder DSL and dict definitions
- Map validator (required, defaults, groups, audit, severity outcome)
- Typed rules, the validator engine and the token validators
- Token service, dispatch service and settings
"""
