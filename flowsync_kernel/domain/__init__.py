"""Pure domain value types shared across FlowSync layers (zero I/O)."""
