"""External capability providers."""
