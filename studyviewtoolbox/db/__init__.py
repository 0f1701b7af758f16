"""Database access for clinical, mutation and copy-number study data."""
