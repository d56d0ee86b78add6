"""Entry points for GIGFLOW (command-line interface)."""
