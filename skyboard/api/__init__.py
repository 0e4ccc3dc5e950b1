"""HTTP surface for weather lookups and saved locations."""
