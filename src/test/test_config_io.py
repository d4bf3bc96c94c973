"""
Test model definition schemas, the YAML loader and the summary exporter.
"""

import logging
import math
import pytest
import yaml
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from nucleus.config import ModelConfig, ProfileConfig
from nucleus.geometry import Arc, Line
from nucleus.io import ModelExporter, ModelLoader
from nucleus.logging_config import setup_logging
from nucleus.model import SymmetricIProfile

CASES = Path(__file__).parent.parent.parent / "cases"


def write_yaml(path: Path, data: dict) -> Path:
    with open(path, 'w') as f:
        yaml.safe_dump(data, f)
    return path


def minimal_config() -> dict:
    return {
        'name': 'bay',
        'families': [
            {'name': 'Beam', 'profile': {'type': 'rectangular', 'depth': 0.4, 'width': 0.2}},
        ],
        'nodes': [
            {'name': 'A', 'position': [0.0, 0.0, 0.0]},
        ],
        'elements': [
            {'name': 'B1', 'start': 'A', 'end': [4.0, 0.0, 0.0], 'family': 'Beam'},
            {'name': 'B2', 'start': [4.0, 0.0, 0.0], 'end': [4.0, 3.0, 0.0]},
        ],
    }


class TestSchemas:
    """Test validation of model definitions."""

    def test_defaults(self):
        config = ModelConfig(name='empty')
        assert config.families == []
        assert config.node_generation.delete_unused_nodes is False
        assert config.tolerance.geometric > 0

    def test_profile_dimensions(self):
        profile = ProfileConfig(type='circular_hollow', diameter=0.2, wall_thickness=0.01)
        assert profile.dimensions() == (0.2, 0.01)

    def test_missing_profile_dimension(self):
        with pytest.raises(ValidationError, match="web_thickness"):
            ProfileConfig(type='symmetric_i', depth=0.3, width=0.15, flange_thickness=0.01)

    def test_unknown_profile_type(self):
        with pytest.raises(ValidationError):
            ProfileConfig(type='hexagonal', diameter=0.2)

    def test_non_positive_dimension(self):
        with pytest.raises(ValidationError):
            ProfileConfig(type='rectangular', depth=0.0, width=0.2)

    def test_unknown_family_reference(self):
        data = minimal_config()
        data['elements'][1]['family'] = 'Column'
        with pytest.raises(ValidationError, match="unknown family"):
            ModelConfig(**data)

    def test_unknown_node_reference(self):
        data = minimal_config()
        data['elements'][0]['start'] = 'Z'
        with pytest.raises(ValidationError, match="unknown node"):
            ModelConfig(**data)

    def test_duplicate_names(self):
        data = minimal_config()
        data['nodes'].append({'name': 'A', 'position': [1.0, 0.0, 0.0]})
        with pytest.raises(ValidationError, match="Duplicate"):
            ModelConfig(**data)

    def test_duplicate_element_names(self):
        data = minimal_config()
        data['elements'][1]['name'] = 'B1'
        with pytest.raises(ValidationError):
            ModelConfig(**data)

    def test_blank_family_name(self):
        data = minimal_config()
        data['families'][0]['name'] = '  '
        with pytest.raises(ValidationError):
            ModelConfig(**data)

    def test_extra_keys_forbidden(self):
        with pytest.raises(ValidationError):
            ModelConfig(name='x', solver={'type': 'none'})

    def test_negative_connection_tolerance(self):
        with pytest.raises(ValidationError):
            ModelConfig(name='x', node_generation={'connection_tolerance': -1.0})

    @pytest.mark.parametrize("profile", [
        {'type': 'circular_hollow', 'diameter': 0.2, 'wall_thickness': 0.1},
        {'type': 'rectangular_hollow', 'depth': 0.2, 'width': 0.1,
         'flange_thickness': 0.01, 'web_thickness': 0.05},
        {'type': 'symmetric_i', 'depth': 0.3, 'width': 0.15,
         'flange_thickness': 0.15, 'web_thickness': 0.007},
        {'type': 't', 'depth': 0.2, 'width': 0.1,
         'flange_thickness': 0.01, 'web_thickness': 0.12},
    ])
    def test_thickness_must_leave_a_section(self, profile):
        with pytest.raises(ValidationError, match="must be less than"):
            ProfileConfig(**profile)

    def test_thin_walls_accepted(self):
        profile = ProfileConfig(type='t', depth=0.2, width=0.1,
                                flange_thickness=0.19, web_thickness=0.09)
        assert profile.dimensions() == (0.2, 0.1, 0.19, 0.09)


class TestModelLoader:
    """Test building models from YAML files."""

    def test_load_minimal(self, tmp_path):
        path = write_yaml(tmp_path / 'bay.yaml', minimal_config())
        model, config = ModelLoader.load(path)
        assert config.name == 'bay'
        assert model.name == 'bay'
        assert len(model.elements) == 2
        b1 = model.elements.find_by_name('B1')
        b2 = model.elements.find_by_name('B2')
        assert isinstance(b1.geometry, Line)
        assert b1.family.name == 'Beam'
        assert b2.family is None
        assert b1.start_node.name == 'A'
        # Coincident coordinate ends share a generated node
        assert b1.end_node is b2.start_node
        assert len(model.nodes.undeleted()) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ModelLoader.load(tmp_path / 'missing.yaml')

    def test_invalid_file(self, tmp_path):
        data = minimal_config()
        data['families'][0]['profile'] = {'type': 'rectangular', 'depth': 0.4}
        path = write_yaml(tmp_path / 'bad.yaml', data)
        with pytest.raises(ValidationError):
            ModelLoader.load(path)
        with pytest.raises(ValidationError):
            ModelLoader.validate(path)

    def test_distance_tolerance_joins_nearby_ends(self, tmp_path):
        data = minimal_config()
        data['elements'][1]['start'] = [4.0, 0.005, 0.0]
        model, _ = ModelLoader.load(write_yaml(tmp_path / 'apart.yaml', data))
        assert len(model.nodes.undeleted()) == 4

        data['tolerance'] = {'distance': 0.01}
        model, _ = ModelLoader.load(write_yaml(tmp_path / 'joined.yaml', data))
        assert len(model.nodes.undeleted()) == 3
        b1 = model.elements.find_by_name('B1')
        assert b1.end_node is model.elements.find_by_name('B2').start_node

    def test_explicit_connection_tolerance_wins(self, tmp_path):
        data = minimal_config()
        data['elements'][1]['start'] = [4.0, 0.005, 0.0]
        data['tolerance'] = {'distance': 0.01}
        data['node_generation'] = {'connection_tolerance': 0.001}
        model, _ = ModelLoader.load(write_yaml(tmp_path / 'bay.yaml', data))
        assert len(model.nodes.undeleted()) == 4

    def test_arc_point_in_line_gives_straight_element(self, tmp_path):
        data = minimal_config()
        data['elements'][0]['arc_point'] = [2.0, 0.01, 0.0]
        model, _ = ModelLoader.load(write_yaml(tmp_path / 'bay.yaml', data))
        assert isinstance(model.elements.find_by_name('B1').geometry, Arc)

        data['tolerance'] = {'angle': 0.05}
        model, _ = ModelLoader.load(write_yaml(tmp_path / 'bay.yaml', data))
        b1 = model.elements.find_by_name('B1')
        assert isinstance(b1.geometry, Line)
        assert b1.length == pytest.approx(4.0)

    def test_validate(self, tmp_path):
        path = write_yaml(tmp_path / 'bay.yaml', minimal_config())
        assert ModelLoader.validate(path)

    def test_portal_frame(self):
        model, config = ModelLoader.load(CASES / 'portal_frame.yaml')
        assert len(model.families) == 3
        assert len(model.elements) == 6
        assert len(model.nodes.undeleted()) == 6

        column = model.families.find_by_name('Column')
        assert isinstance(column.profile, SymmetricIProfile)

        c1 = model.elements.find_by_name('C1')
        r1 = model.elements.find_by_name('R1')
        assert c1.start_node.name == 'A'
        assert c1.end_node is r1.start_node

        r2 = model.elements.find_by_name('R2')
        assert isinstance(r2.geometry, Arc)
        assert r2.geometry.radius == pytest.approx(5.0)
        assert r2.length == pytest.approx(10 * math.asin(0.6))
        assert r2.orientation == pytest.approx(math.pi / 2)

        tie = model.elements.find_by_name('T1')
        assert tie.nodes() == [c1.start_node, model.nodes.find_by_name('B')]


class TestModelExporter:
    """Test model summaries."""

    def test_summary(self, tmp_path):
        model, _ = ModelLoader.load(write_yaml(tmp_path / 'bay.yaml', minimal_config()))
        summary = ModelExporter.summary(model)
        assert summary['name'] == 'bay'
        assert summary['nodes'] == 3
        beam = summary['families'][0]
        assert beam['profile'] == '0.4x0.2'
        assert beam['area'] == pytest.approx(0.08)
        assert beam['ixx'] == pytest.approx(0.2 * 0.4**3 / 12)
        b1 = summary['elements'][0]
        assert b1['name'] == 'B1'
        assert b1['type'] == 'LinearElement'
        assert b1['length'] == pytest.approx(4.0)
        assert b1['start_node'] == 'A'
        assert summary['elements'][1]['family'] is None
        assert summary['bounding_box']['min'] == [-3.0, -3.0, -3.0]
        assert summary['bounding_box']['max'] == [7.0, 6.0, 3.0]

    def test_portal_frame_summary(self):
        model, _ = ModelLoader.load(CASES / 'portal_frame.yaml')
        summary = ModelExporter.summary(model)
        tie = next(f for f in summary['families'] if f['name'] == 'Tie')
        outer, inner = 0.0603, 0.0603 - 2 * 0.004
        assert tie['area'] == pytest.approx(math.pi * (outer**2 - inner**2) / 4, rel=1e-6)
        assert tie['ixx'] == pytest.approx(math.pi * (outer**4 - inner**4) / 64, rel=1e-6)
        r2 = next(e for e in summary['elements'] if e['name'] == 'R2')
        assert r2['length'] == pytest.approx(10 * math.asin(0.6))

    def test_deleted_elements_left_out(self, tmp_path):
        model, _ = ModelLoader.load(write_yaml(tmp_path / 'bay.yaml', minimal_config()))
        model.elements.find_by_name('B2').delete()
        names = [e['name'] for e in ModelExporter.summary(model)['elements']]
        assert names == ['B1']

    def test_export_summary(self, tmp_path):
        model, _ = ModelLoader.load(write_yaml(tmp_path / 'bay.yaml', minimal_config()))
        target = ModelExporter.export_summary(model, tmp_path / 'out' / 'summary.yaml')
        assert target.exists()
        with open(target, 'r') as f:
            data = yaml.safe_load(f)
        assert data == ModelExporter.summary(model)
        assert list(data.keys())[0] == 'name'


class TestLogging:
    """Test package logger configuration."""

    def test_repeated_setup_does_not_stack_handlers(self, tmp_path):
        log_file = tmp_path / 'run.log'
        setup_logging(logging.DEBUG)
        logger = setup_logging(logging.INFO, str(log_file))
        assert logger.name == 'nucleus'
        assert len(logger.handlers) == 2
        logging.getLogger('nucleus.io').info("written")
        for handler in logger.handlers:
            handler.flush()
        assert "written" in log_file.read_text(encoding='utf-8')
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
