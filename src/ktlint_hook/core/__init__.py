"""Core hook generation, installation and filtering logic."""
