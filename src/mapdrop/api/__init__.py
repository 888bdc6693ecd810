"""HTTP API for MapDrop."""
