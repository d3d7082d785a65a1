"""
Pydantic schemas for zone engine results.

Map definition models live in ``zonemap.environment.schemas``; this module
holds what the engine and the query facade hand back to callers:
- Validation issues and results (structured records, never exceptions)
- Tile-inference suggestions
- Aggregate map statistics
- Query facade answers (movement options, features, directions)
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from zonemap.environment import EntityType, Position, Rectangle, ZonePurpose


# ============================================================================
# Validation Schemas
# ============================================================================


class ValidationErrorType(str, Enum):
    STRUCTURAL = "STRUCTURAL"
    LOGICAL = "LOGICAL"
    REFERENCE = "REFERENCE"
    PATHFINDING = "PATHFINDING"


class ValidationSeverity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"


class ValidationIssue(BaseModel):
    """A single validation finding.

    Issues are collected, not raised; the caller decides whether an ERROR is
    fatal. ``location`` is a human-readable pointer such as ``"Zone: market"``
    or ``"Connection 3"``.
    """

    type: ValidationErrorType
    location: str = Field(..., description="Where the problem was found")
    message: str
    severity: ValidationSeverity
    suggested_fix: Optional[str] = Field(None, description="Optional remediation hint")


class ValidationResult(BaseModel):
    """Errors and warnings from ``ZoneEngine.validate_map``.

    ``is_valid`` only reflects errors; warnings never fail validation.
    """

    is_valid: bool
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)


# ============================================================================
# Tile Inference Schemas
# ============================================================================


class SuggestedZone(BaseModel):
    """A zone proposed by tile-grid inference, in pixel coordinates."""

    bounds: Rectangle
    suggested_purpose: ZonePurpose
    detected_entities: List[EntityType] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=1.0)
    # Number of tiles folded into this suggestion (summed when suggestions merge)
    cell_count: int = Field(0, ge=0)


# ============================================================================
# Statistics Schemas
# ============================================================================


class MapStatistics(BaseModel):
    """Aggregate counts over a map. Keys of the breakdowns are enum values."""

    total_zones: int
    zones_by_purpose: Dict[str, int] = Field(default_factory=dict)
    total_connections: int
    average_connections: float = Field(..., description="Stored connections per zone")
    total_entities: int
    entities_by_type: Dict[str, int] = Field(default_factory=dict)


# ============================================================================
# Query Facade Schemas
# ============================================================================


class InteractionType(str, Enum):
    NONE = "NONE"
    DOOR = "DOOR"
    CHEST = "CHEST"
    NPC = "NPC"
    SHOP = "SHOP"
    SIGN = "SIGN"
    PORTAL = "PORTAL"
    TRIGGER = "TRIGGER"
    PICKUP = "PICKUP"


class MovementOption(BaseModel):
    direction: str
    position: Position
    description: str


class Feature(BaseModel):
    type: InteractionType
    position: Position
    distance: float
    description: str
    keywords: List[str] = Field(default_factory=list)


class PathResult(BaseModel):
    """Natural-language directions for a path.

    ``distance`` and ``estimated_time`` are -1 when no path exists.
    """

    found: bool
    steps: List[str] = Field(default_factory=list)
    distance: int
    estimated_time: int
    path: List[Position] = Field(default_factory=list)
