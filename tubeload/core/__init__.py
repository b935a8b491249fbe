"""Core upload protocol components."""
