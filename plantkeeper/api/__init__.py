"""PlantKeeper HTTP API."""
