"""Feed loading, row parsing and settings."""
