"""Small utilities with no dependence on the rest of the package."""
