"""
Pydantic schemas for model definition files.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Dict, List, Literal, Optional, Tuple, Union

from ..geometry import tolerance as tol


# Dimensions each profile type needs, in constructor order
PROFILE_DIMENSIONS: Dict[str, Tuple[str, ...]] = {
    "rectangular": ("depth", "width"),
    "rectangular_hollow": ("depth", "width", "flange_thickness", "web_thickness"),
    "circular": ("diameter",),
    "circular_hollow": ("diameter", "wall_thickness"),
    "symmetric_i": ("depth", "width", "flange_thickness", "web_thickness"),
    "t": ("depth", "width", "flange_thickness", "web_thickness"),
}

# (thickness, multiple, outer dimension): multiple * thickness must stay below the outer size
THICKNESS_LIMITS: Dict[str, Tuple[Tuple[str, int, str], ...]] = {
    "rectangular_hollow": (("flange_thickness", 2, "depth"), ("web_thickness", 2, "width")),
    "circular_hollow": (("wall_thickness", 2, "diameter"),),
    "symmetric_i": (("flange_thickness", 2, "depth"), ("web_thickness", 1, "width")),
    "t": (("flange_thickness", 1, "depth"), ("web_thickness", 1, "width")),
}

Point3 = Tuple[float, float, float]


class ToleranceConfig(BaseModel):
    """Comparison tolerances."""
    geometric: float = Field(
        default=tol.GEOMETRIC,
        gt=0,
        description="Coincidence tolerance for points, e.g. curve closure"
    )
    distance: float = Field(
        default=tol.DISTANCE,
        gt=0,
        description="Default node connection tolerance when node_generation leaves it unset"
    )
    angle: float = Field(
        default=tol.ANGLE,
        gt=0,
        description="Angle tolerance [rad]; an arc_point within it of the chord gives a straight element"
    )


class NodeGenerationConfig(BaseModel):
    """Node generation settings."""
    connection_tolerance: Optional[float] = Field(
        default=None,
        ge=0,
        description="Vertices closer than this share a node (default: tolerance.distance)"
    )
    delete_unused_nodes: bool = Field(
        default=False,
        description="Delete nodes left without any connected element"
    )


class ProfileConfig(BaseModel):
    """Section profile: a type plus the dimensions that type needs."""
    type: Literal[
        "rectangular",
        "rectangular_hollow",
        "circular",
        "circular_hollow",
        "symmetric_i",
        "t",
    ] = Field(..., description="Profile type")
    depth: Optional[float] = Field(default=None, gt=0, description="Overall depth")
    width: Optional[float] = Field(default=None, gt=0, description="Overall width")
    flange_thickness: Optional[float] = Field(default=None, gt=0)
    web_thickness: Optional[float] = Field(default=None, gt=0)
    diameter: Optional[float] = Field(default=None, gt=0, description="Outside diameter")
    wall_thickness: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_dimensions(self):
        """Ensure every dimension required by the type is given and the thicknesses leave a section."""
        missing = [d for d in PROFILE_DIMENSIONS[self.type] if getattr(self, d) is None]
        if missing:
            raise ValueError(f"Profile type '{self.type}' requires: {', '.join(missing)}")
        for thickness, multiple, outer in THICKNESS_LIMITS.get(self.type, ()):
            if multiple * getattr(self, thickness) >= getattr(self, outer):
                factor = f"{multiple} x " if multiple > 1 else ""
                raise ValueError(f"Profile type '{self.type}': {factor}{thickness} "
                                 f"must be less than {outer}")
        return self

    def dimensions(self) -> Tuple[float, ...]:
        """Required dimensions in constructor order."""
        return tuple(getattr(self, d) for d in PROFILE_DIMENSIONS[self.type])


class FamilyConfig(BaseModel):
    """Section family."""
    name: str = Field(..., description="Unique family name")
    profile: ProfileConfig = Field(..., description="Cross-section profile")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Family name cannot be empty")
        return v.strip()


class NodeConfig(BaseModel):
    """Named node."""
    name: str = Field(..., description="Unique node name")
    position: Point3 = Field(..., description="Position (x, y, z)")


class ElementConfig(BaseModel):
    """Linear element between two ends."""
    name: str = Field(default="", description="Element name (unique if given)")
    start: Union[str, Point3] = Field(..., description="Node name or (x, y, z)")
    end: Union[str, Point3] = Field(..., description="Node name or (x, y, z)")
    arc_point: Optional[Point3] = Field(
        default=None,
        description="Point on the set-out between the ends; makes the element an arc"
    )
    family: Optional[str] = Field(default=None, description="Section family name")
    orientation_deg: float = Field(
        default=0.0,
        description="Rotation of the section about the set-out [deg]"
    )


class ModelConfig(BaseModel):
    """Top-level model definition."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    name: str = Field(..., description="Model name")
    description: str = Field(default="", description="Model description")
    tolerance: ToleranceConfig = Field(default_factory=ToleranceConfig)
    node_generation: NodeGenerationConfig = Field(default_factory=NodeGenerationConfig)
    families: List[FamilyConfig] = Field(default_factory=list)
    nodes: List[NodeConfig] = Field(default_factory=list)
    elements: List[ElementConfig] = Field(default_factory=list)

    @field_validator('families', 'nodes')
    @classmethod
    def check_unique_names(cls, v):
        """Ensure names are unique."""
        names = [item.name for item in v]
        if len(names) != len(set(names)):
            duplicates = [name for name in names if names.count(name) > 1]
            raise ValueError(f"Duplicate names: {set(duplicates)}")
        return v

    @field_validator('elements')
    @classmethod
    def check_unique_element_names(cls, v):
        names = [e.name for e in v if e.name]
        if len(names) != len(set(names)):
            duplicates = [name for name in names if names.count(name) > 1]
            raise ValueError(f"Duplicate element names: {set(duplicates)}")
        return v

    @model_validator(mode="after")
    def check_references(self):
        """Ensure element family and node references name declared objects."""
        families = {f.name for f in self.families}
        nodes = {n.name for n in self.nodes}
        for i, element in enumerate(self.elements):
            label = element.name or f"#{i}"
            if element.family is not None and element.family not in families:
                raise ValueError(f"Element {label} references unknown family '{element.family}'")
            for end in (element.start, element.end):
                if isinstance(end, str) and end not in nodes:
                    raise ValueError(f"Element {label} references unknown node '{end}'")
        return self
