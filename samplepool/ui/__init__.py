"""PyQt5 user interface layer."""
