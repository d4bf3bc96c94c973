"""
YAML model file loader with validation.
"""

import logging
from pathlib import Path
from typing import Dict, Tuple, Union

import yaml

from ..config.schemas import ElementConfig, ModelConfig, ProfileConfig
from ..geometry import Angle, Arc, Curve, Line, Vector
from ..model import (
    CircularHollowProfile,
    CircularProfile,
    Model,
    Node,
    NodeGenerationParameters,
    RectangularHollowProfile,
    RectangularProfile,
    SectionProfile,
    SymmetricIProfile,
    TProfile,
)

logger = logging.getLogger(__name__)

PROFILE_TYPES = {
    "rectangular": RectangularProfile,
    "rectangular_hollow": RectangularHollowProfile,
    "circular": CircularProfile,
    "circular_hollow": CircularHollowProfile,
    "symmetric_i": SymmetricIProfile,
    "t": TProfile,
}


class ModelLoader:
    """Load and validate models from YAML files."""

    @staticmethod
    def load(filepath: Union[str, Path]) -> Tuple[Model, ModelConfig]:
        """
        Load a model file and build the Model.

        Args:
            filepath: Path to YAML model file

        Returns:
            Tuple of (Model, validated config)
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Model file not found: {filepath}")

        with open(filepath, 'r') as f:
            raw_config = yaml.safe_load(f)

        config = ModelConfig(**raw_config)
        logger.info("Loaded model definition '%s' from %s", config.name, filepath)

        model = ModelLoader.build_model(config)
        return model, config

    @staticmethod
    def build_model(config: ModelConfig) -> Model:
        """
        Build a Model from a validated config.

        Named nodes are created first; element ends given as coordinates get
        their nodes from node generation, so coincident ends share a node.
        """
        model = Model(config.name)

        for family_config in config.families:
            profile = ModelLoader._build_profile(family_config.profile)
            model.create.section_family(family_config.name, profile)

        nodes: Dict[str, Node] = {}
        for node_config in config.nodes:
            node = model.create.node(Vector(*node_config.position))
            node.name = node_config.name
            nodes[node_config.name] = node

        for element_config in config.elements:
            curve = ModelLoader._build_curve(element_config, nodes, config.tolerance.geometric,
                                             config.tolerance.angle)
            family = None
            if element_config.family is not None:
                family = model.families.find_by_name(element_config.family)
            element = model.create.linear_element(curve, family)
            element.name = element_config.name
            element.orientation = Angle.from_degrees(element_config.orientation_deg)
            if isinstance(element_config.start, str):
                element.start_node = nodes[element_config.start]
            if isinstance(element_config.end, str):
                element.end_node = nodes[element_config.end]

        connection_tolerance = config.node_generation.connection_tolerance
        if connection_tolerance is None:
            connection_tolerance = config.tolerance.distance
        options = NodeGenerationParameters(
            connection_tolerance=connection_tolerance,
            delete_unused_nodes=config.node_generation.delete_unused_nodes,
        )
        model.regenerate_nodes(options)

        logger.info("Built model '%s': %d families, %d nodes, %d elements",
                    model.name, len(model.families), len(model.nodes.undeleted()),
                    len(model.elements))
        return model

    @staticmethod
    def _build_profile(profile_config: ProfileConfig) -> SectionProfile:
        return PROFILE_TYPES[profile_config.type](*profile_config.dimensions())

    @staticmethod
    def _build_curve(element_config: ElementConfig, nodes: Dict[str, Node],
                     geometric_tolerance: float, angle_tolerance: float) -> Curve:
        def resolve(end) -> Vector:
            if isinstance(end, str):
                return nodes[end].position
            return Vector(*end)

        start = resolve(element_config.start)
        end = resolve(element_config.end)
        if element_config.arc_point is not None:
            point_on = Vector(*element_config.arc_point)
            straight = (not start.equals(end, geometric_tolerance)
                        and (point_on - start).is_parallel_to(end - point_on, angle_tolerance))
            if straight:
                logger.warning("Element %s: arc_point is in line with its ends, using a straight set-out",
                               element_config.name or "(unnamed)")
                return Line(start, end)
            return Arc(start, point_on, end, tolerance=geometric_tolerance)
        return Line(start, end)

    @staticmethod
    def validate(filepath: Union[str, Path]) -> bool:
        """
        Validate a model file without building the model.

        Returns:
            True if valid, raises ValidationError otherwise
        """
        filepath = Path(filepath)

        with open(filepath, 'r') as f:
            raw_config = yaml.safe_load(f)

        ModelConfig(**raw_config)

        return True
