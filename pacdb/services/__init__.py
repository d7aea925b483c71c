"""Service implementations for pacdb."""
