"""Map persistence, grid generation and seeded randomness."""
