"""
Model exporter - write a YAML summary of section properties and elements.

Usage:
    from nucleus.io import ModelExporter

    ModelExporter.export_summary(model, 'results/summary.yaml')
"""

import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..model import Model, SectionFamily

logger = logging.getLogger(__name__)


class ModelExporter:
    """Export model summaries."""

    @staticmethod
    def summary(model: Model) -> Dict[str, Any]:
        """
        Plain-data summary of a model.

        Families report their profile's section properties; elements their
        length, family and end nodes. Deleted objects are left out.
        """
        families = []
        for family in model.families.undeleted():
            entry: Dict[str, Any] = {'name': family.name}
            if isinstance(family, SectionFamily) and family.profile is not None:
                profile = family.profile
                entry.update({
                    'profile': profile.description,
                    'area': float(profile.area),
                    'ixx': float(profile.ixx),
                    'iyy': float(profile.iyy),
                })
            families.append(entry)

        elements = []
        for element in model.elements.undeleted():
            start = getattr(element, 'start_node', None)
            end = getattr(element, 'end_node', None)
            elements.append({
                'name': element.description,
                'type': type(element).__name__,
                'family': element.family.name if element.family is not None else None,
                'length': float(getattr(element, 'length', 0.0)),
                'start_node': start.description if start is not None else None,
                'end_node': end.description if end is not None else None,
            })

        box = model.bounding_box
        return {
            'name': model.name,
            'families': families,
            'nodes': len(model.nodes.undeleted()),
            'elements': elements,
            'bounding_box': {
                'min': [float(box.min_x), float(box.min_y), float(box.min_z)],
                'max': [float(box.max_x), float(box.max_y), float(box.max_z)],
            },
        }

    @staticmethod
    def export_summary(model: Model, filepath: Union[str, Path]) -> Path:
        """
        Write the model summary to a YAML file.

        Args:
            model: Model to summarise
            filepath: Target file; parent directories are created

        Returns:
            Path of the written file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w') as f:
            yaml.dump(ModelExporter.summary(model), f, default_flow_style=False, sort_keys=False)

        logger.info("Exported summary of '%s' to %s", model.name, filepath)
        return filepath
