"""
Shared utilities for the rate gates package.

This package aggregates common building blocks consumed by the gates:

- config: Gate settings via pydantic-settings
- logging: Structured logging with context correlation
- metrics: Prometheus counters for gate outcomes
- errors: Canonical error types and responses

Any cross-cutting logic should live here to avoid import cycles. Do not
import from the gates package into shared/.
"""
