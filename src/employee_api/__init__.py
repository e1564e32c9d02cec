"""Employee registration API."""
