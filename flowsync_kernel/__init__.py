"""
FlowSync Kernel

Shared foundation for the practice-management core:
- Structured JSON logging
- Typed exceptions with machine-readable codes
- Injectable clock and decimal helpers
- Workflow (state machine) value types
- SQLAlchemy declarative base and engine helpers
"""

__version__ = "0.1.0"
