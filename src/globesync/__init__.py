"""GlobeSync route computation service."""
