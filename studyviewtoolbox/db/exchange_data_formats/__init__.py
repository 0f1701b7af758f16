"""Data structures for ready exchange with clients of the study view API."""
