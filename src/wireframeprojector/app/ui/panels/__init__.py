"""Left-side input panels."""
