"""Reference REST backend for job_deck."""
