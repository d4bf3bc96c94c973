"""
Test the model layer: elements, nodes, tables and change notification.
"""

import uuid
import pytest
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from nucleus.geometry import Angle, Line, PlanarRegion, PolyLine, Vector
from nucleus.model import (
    LinearElement,
    Model,
    Node,
    NodeGenerationParameters,
    NonExclusiveGeometryError,
    PanelElement,
    RectangularProfile,
    SectionFamily,
)


def two_bar_model():
    """Two bars meeting at (5, 0), nodes regenerated."""
    model = Model("frame")
    first = model.create.linear_element(Line(Vector(0.0, 0.0), Vector(5.0, 0.0)))
    second = model.create.linear_element(Line(Vector(5.0, 0.0), Vector(5.0, 5.0)))
    model.regenerate_nodes()
    return model, first, second


class TestElementGeometry:
    """Test exclusive ownership of set-out geometry."""

    def test_geometry_back_link(self):
        line = Line(Vector.ZERO, Vector.UNIT_X)
        element = LinearElement(line)
        assert line.element is element
        assert line.start.element is element

    def test_geometry_cannot_be_shared(self):
        line = Line(Vector.ZERO, Vector.UNIT_X)
        first = LinearElement(line)
        second = LinearElement()
        with pytest.raises(NonExclusiveGeometryError):
            second.geometry = line
        assert line.element is first
        assert second.geometry is None

    def test_wrong_geometry_type(self):
        with pytest.raises(TypeError):
            LinearElement(PlanarRegion(PolyLine.rectangle(1.0, 1.0)))

    def test_wrong_family_type(self):
        with pytest.raises(TypeError):
            PanelElement(family=SectionFamily("S"))

    def test_replaced_geometry_is_released(self):
        old = Line(Vector.ZERO, Vector.UNIT_X)
        element = LinearElement(old)
        element.geometry = Line(Vector.ZERO, Vector.UNIT_Y)
        assert old.element is None
        # Released geometry can be reused
        assert LinearElement(old).geometry is old

    def test_panel_area(self):
        panel = PanelElement(PlanarRegion(PolyLine.rectangle(2.0, 3.0)))
        assert panel.area == pytest.approx(6.0)
        assert panel.nominal_position().equals(Vector.ZERO, 1e-12)

    def test_orientate_to_vector(self):
        element = LinearElement(Line(Vector.ZERO, Vector(4.0, 0.0)))
        element.orientate_to_vector(Vector.UNIT_Z)
        assert element.orientation == pytest.approx(Angle.RIGHT)
        frame = element.local_coordinate_system(0.5)
        assert frame.y.equals(Vector.UNIT_Z, 1e-9)


class TestModelTables:
    """Test adding and looking up model objects."""

    def test_add_assigns_numeric_ids(self):
        model, first, second = two_bar_model()
        assert first.numeric_id == 1
        assert second.numeric_id == 2
        assert first.model is model
        assert first.description == "LinearElement 1"

    def test_add_twice(self):
        model = Model()
        node = Node(Vector.ZERO)
        assert model.add(node)
        assert not model.add(node)
        assert len(model.nodes) == 1

    def test_lookup_by_guid(self):
        model, first, _ = two_bar_model()
        assert model[first.guid] is first
        assert model.get(uuid.uuid4()) is None
        with pytest.raises(KeyError):
            model[uuid.uuid4()]

    def test_table_type_check(self):
        model = Model()
        with pytest.raises(TypeError):
            model.elements.add(Node())

    def test_default_family_names(self):
        model = Model()
        assert model.create.section_family().name == "Section1"
        assert model.create.section_family().name == "Section2"
        assert model.create.panel_family().name == "Build-up1"
        assert model.families.find_by_name("Section2") is not None

    def test_everything(self):
        model, _, _ = two_bar_model()
        model.create.section_family("Beam")
        assert len(list(model.everything())) == 1 + 3 + 2

    def test_purge_deleted(self):
        model, first, _ = two_bar_model()
        first.delete()
        assert len(model.elements.undeleted()) == 1
        assert model.elements.purge_deleted() == 1
        assert len(model.elements) == 1
        assert first.model is None

    def test_added_callback(self):
        model = Model()
        added = []
        model.on_object_added.append(added.append)
        node = model.create.node(Vector.ZERO)
        assert added == [node]


class TestNodes:
    """Test node generation and connectivity."""

    def test_shared_end_gets_one_node(self):
        model, first, second = two_bar_model()
        assert len(model.nodes) == 3
        assert first.end_node is second.start_node
        assert first.end_node.connected_elements() == [first, second]
        assert first.start_node.connection_count() == 1

    def test_regenerate_is_stable(self):
        model, first, _ = two_bar_model()
        node = first.start_node
        model.regenerate_nodes()
        assert first.start_node is node
        assert len(model.nodes) == 3

    def test_delete_unused_nodes(self):
        model, _, _ = two_bar_model()
        stray = model.create.node(Vector(100.0, 0.0))
        model.regenerate_nodes(NodeGenerationParameters(delete_unused_nodes=True))
        assert stray.is_deleted
        assert len(model.nodes.undeleted()) == 3

    def test_reuse_tolerance(self):
        model = Model()
        node = model.create.node(Vector.ZERO)
        assert model.create.node(Vector(0.01, 0.0), reuse_tolerance=0.1) is node
        assert model.create.node(Vector(0.01, 0.0)) is not node

    def test_reused_node_is_undeleted(self):
        model = Model()
        node = model.create.node(Vector.ZERO)
        node.delete()
        assert model.create.node(Vector.ZERO, reuse_tolerance=0.1) is node
        assert not node.is_deleted

    def test_negative_tolerance_rejected(self):
        with pytest.raises(ValueError):
            NodeGenerationParameters(connection_tolerance=-1.0)

    def test_element_between_nodes(self):
        model = Model()
        a = model.create.node(Vector.ZERO)
        b = model.create.node(Vector(3.0, 4.0))
        element = model.create.linear_element_between(a, b)
        assert element.length == pytest.approx(5.0)
        assert element.start_node is a
        assert element.nodes() == [a, b]
        assert a.connected_elements() == [element]

    def test_replace_with_foreign_geometry_changes_nothing(self):
        model, first, second = two_bar_model()
        start, end = first.start_node, first.end_node
        second_start = second.start_node
        with pytest.raises(NonExclusiveGeometryError):
            second.replace_geometry(first.geometry)
        assert first.start_node is start
        assert first.end_node is end
        assert second.start_node is second_start
        assert first.geometry.element is first

    def test_move_node_drags_vertices(self):
        model = Model()
        a = model.create.node(Vector.ZERO)
        b = model.create.node(Vector(3.0, 0.0))
        element = model.create.linear_element_between(a, b)
        a.move_to(Vector(0.0, 0.0, 4.0))
        assert element.geometry.start_point == Vector(0.0, 0.0, 4.0)
        assert element.length == pytest.approx(5.0)

    def test_replace_geometry_keeps_nodes(self):
        model = Model()
        a = model.create.node(Vector.ZERO)
        b = model.create.node(Vector(3.0, 0.0))
        element = model.create.linear_element_between(a, b)
        old = element.geometry
        element.replace_geometry(Line(Vector.ZERO, Vector(3.0, 1.0)))
        assert element.start_node is a
        assert element.end_node is b
        assert old.start.node is None
        assert a.connected_elements() == [element]

    def test_merge(self):
        model = Model()
        a = model.create.node(Vector.ZERO)
        b = model.create.node(Vector(1.0, 0.0))
        c = model.create.node(Vector(1.0, 1e-6))
        model.create.linear_element_between(a, b)
        other = model.create.linear_element_between(c, a)
        b.merge(c)
        assert c.is_deleted
        assert other.start_node is b

    def test_deleted_element_not_connected(self):
        model, first, second = two_bar_model()
        shared = first.end_node
        second.delete()
        assert shared.connected_elements() == [first]
        assert shared.connected_elements(undeleted_only=False) == [first, second]


class TestNotification:
    """Test change notification up to the model."""

    def test_vertex_move_reports_geometry_change(self):
        model, first, _ = two_bar_model()
        events = []
        model.on_object_property_changed.append(lambda sender, name: events.append((sender, name)))
        first.geometry.start.position = Vector(-1.0, 0.0)
        assert (first, "geometry") in events

    def test_profile_change_reports_family_change(self):
        model = Model()
        family = model.create.section_family("Beam", RectangularProfile(0.4, 0.2))
        events = []
        model.on_object_property_changed.append(lambda sender, name: events.append((sender, name)))
        family.profile.depth = 0.5
        assert events == [(family, "profile")]

    def test_rename_reports(self):
        model = Model()
        node = model.create.node(Vector.ZERO)
        events = []
        model.on_object_property_changed.append(lambda sender, name: events.append(name))
        node.name = "A"
        assert events == ["name"]

    def test_purged_object_no_longer_reports(self):
        model, first, _ = two_bar_model()
        events = []
        model.on_object_property_changed.append(lambda sender, name: events.append(name))
        first.delete()
        model.elements.purge_deleted()
        events.clear()
        first.name = "gone"
        assert events == []


class TestBoundingBox:
    """Test the model's cached bounding box."""

    def test_empty_model(self):
        box = Model().bounding_box
        assert box.min == Vector(-3.0, -3.0, -3.0)
        assert box.max == Vector(3.0, 3.0, 3.0)

    def test_includes_margin(self):
        model, _, _ = two_bar_model()
        box = model.bounding_box
        assert box.min == Vector(-3.0, -3.0, -3.0)
        assert box.max == Vector(8.0, 8.0, 3.0)

    def test_refreshes_after_edit(self):
        model, first, _ = two_bar_model()
        assert model.bounding_box.min_x == -3.0
        first.geometry.start.position = Vector(-10.0, 0.0)
        assert model.bounding_box.min_x == -13.0

    def test_deleted_elements_excluded(self):
        model, _, second = two_bar_model()
        second.delete()
        assert model.bounding_box.max_y == 3.0
