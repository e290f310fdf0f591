"""Event listener extensions loaded at bot startup."""
