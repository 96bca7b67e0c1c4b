"""Vector math primitives."""
