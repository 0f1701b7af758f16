"""Aggregation of clinical and genomic data over a filtered cohort of samples."""
