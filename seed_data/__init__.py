"""Fixed quiz datasets shipped with the seeding scripts."""
