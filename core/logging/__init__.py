"""
Logging utilities for the TSOAM Church back office.

This package provides:
- Structured JSON logging
- Sensitive data filtering for member PII
- Context-aware loggers for data layer operations
"""
