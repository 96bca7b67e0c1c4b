"""Timing instrumentation."""
