"""User-facing front-ends for the console engine."""
