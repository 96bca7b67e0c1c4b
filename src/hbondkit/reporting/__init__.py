"""Export of detection results."""
