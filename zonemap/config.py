"""
zonemap Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Config:
    """Engine configuration loaded from environment variables."""

    # Pathfinding
    # Maximum A* node expansions per intra-zone search. 0 disables the budget.
    MAX_SEARCH_NODES: int = int(os.getenv("ZONEMAP_MAX_SEARCH_NODES", "0"))

    # Tile-grid inference
    DEFAULT_TILE_SIZE: int = int(os.getenv("ZONEMAP_DEFAULT_TILE_SIZE", "16"))
    # Regions with fewer cells than this are treated as noise
    MIN_REGION_SIZE: int = int(os.getenv("ZONEMAP_MIN_REGION_SIZE", "10"))
    SUGGESTION_CONFIDENCE: float = float(os.getenv("ZONEMAP_SUGGESTION_CONFIDENCE", "0.7"))

    # Query facade
    NEARBY_RADIUS: int = int(os.getenv("ZONEMAP_NEARBY_RADIUS", "10"))

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    MAPS_DIR: Path = Path(os.getenv("ZONEMAP_MAPS_DIR", str(PROJECT_ROOT / "examples" / "maps")))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors for out-of-range values."""
        if cls.MAX_SEARCH_NODES < 0:
            raise ValueError(
                "ZONEMAP_MAX_SEARCH_NODES must be >= 0 (0 disables the search budget)"
            )

        if cls.DEFAULT_TILE_SIZE <= 0:
            raise ValueError("ZONEMAP_DEFAULT_TILE_SIZE must be a positive integer")

        if cls.MIN_REGION_SIZE < 1:
            raise ValueError("ZONEMAP_MIN_REGION_SIZE must be at least 1")

        if not 0.0 <= cls.SUGGESTION_CONFIDENCE <= 1.0:
            raise ValueError("ZONEMAP_SUGGESTION_CONFIDENCE must be between 0 and 1")

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        budget = cls.MAX_SEARCH_NODES or "unbounded"
        lines = [
            "zonemap Configuration:",
            f"  Search Budget: {budget}",
            f"  Tile Size: {cls.DEFAULT_TILE_SIZE}px",
            f"  Min Region Size: {cls.MIN_REGION_SIZE} cells",
            f"  Suggestion Confidence: {cls.SUGGESTION_CONFIDENCE}",
            f"  Nearby Radius: {cls.NEARBY_RADIUS}",
            f"  Maps Directory: {cls.MAPS_DIR}",
        ]
        return "\n".join(lines)
