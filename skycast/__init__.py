"""skycast: resolve a free-text place name into display-ready weather."""
