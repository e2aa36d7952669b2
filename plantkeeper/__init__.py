"""PlantKeeper - plant care tracking across sites."""

__version__ = "1.0.0"
