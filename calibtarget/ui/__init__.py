"""Qt user interface to preview and export calibration targets."""
