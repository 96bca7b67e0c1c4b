"""Hydrogen bond classification, evaluation and detection."""
