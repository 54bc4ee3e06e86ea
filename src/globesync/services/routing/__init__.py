"""Route resolution pipeline: geocoding, OSRM routing and the fallback orchestrator."""
