"""MapDrop: geotagged messages with read tracking and social unlocks."""

__version__ = "0.1.0"
