"""Level text I/O and built-in levels."""
