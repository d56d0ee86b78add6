"""GIGFLOW command-line interface."""
