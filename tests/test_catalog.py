"""
Tests for RelationKind and MetadataRelationCatalog.
"""

import pytest

from relata.catalog import MetadataRelationCatalog, RelationDefs
from relata.faults import MetadataInvalidFault
from relata.kinds import MANY_KINDS, SETTABLE_KINDS, RelationKind
from relata.metadata import Metadata, MetadataLoader
from relata.order import Direction, OrderItem


# ============================================================================
# RelationKind
# ============================================================================


class TestRelationKind:

    def test_values_match_metadata_strings(self):
        assert RelationKind.values() == [
            "belongsTo", "belongsToParent", "hasOne",
            "manyMany", "hasMany", "hasChildren",
        ]

    def test_is_str(self):
        assert RelationKind.HAS_MANY == "hasMany"
        assert str(RelationKind.BELONGS_TO) == "belongsTo"

    def test_labels(self):
        assert RelationKind.MANY_MANY.label == "Many-to-Many"
        assert RelationKind.HAS_ONE.label == "Has One"

    @pytest.mark.parametrize("kind", [
        RelationKind.MANY_MANY, RelationKind.HAS_MANY, RelationKind.HAS_CHILDREN,
    ])
    def test_many_kinds(self, kind):
        assert kind.is_many is True
        assert kind.is_settable is False

    @pytest.mark.parametrize("kind", [
        RelationKind.BELONGS_TO, RelationKind.BELONGS_TO_PARENT, RelationKind.HAS_ONE,
    ])
    def test_single_kinds(self, kind):
        assert kind.is_many is False
        assert kind.is_settable is True

    def test_partition(self):
        assert MANY_KINDS | SETTABLE_KINDS == set(RelationKind)
        assert not MANY_KINDS & SETTABLE_KINDS

    def test_parse(self):
        assert RelationKind.parse("hasChildren") is RelationKind.HAS_CHILDREN
        assert RelationKind.parse(RelationKind.HAS_ONE) is RelationKind.HAS_ONE
        assert RelationKind.parse("hasLots") is None
        assert RelationKind.parse(None) is None


# ============================================================================
# MetadataRelationCatalog
# ============================================================================


class TestMetadataRelationCatalog:

    def test_kind_of(self, catalog):
        assert catalog.kind_of("Account", "contacts") is RelationKind.HAS_MANY
        assert catalog.kind_of("Account", "teams") is RelationKind.MANY_MANY
        assert catalog.kind_of("Account", "assignedUser") is RelationKind.BELONGS_TO
        assert catalog.kind_of("Account", "parent") is RelationKind.BELONGS_TO_PARENT

    def test_kind_of_unknown(self, catalog):
        assert catalog.kind_of("Account", "nope") is None
        assert catalog.kind_of("Nothing", "contacts") is None

    def test_has_relation(self, catalog):
        assert catalog.has_relation("Account", "contacts") is True
        assert catalog.has_relation("Account", "nope") is False

    def test_order_params_desc(self, catalog):
        assert catalog.order_params("Account", "contacts") == OrderItem("name", Direction.DESC)

    def test_order_params_default_asc(self, catalog):
        assert catalog.order_params("Account", "teams") == OrderItem("name", Direction.ASC)

    def test_order_params_absent(self, catalog):
        assert catalog.order_params("Account", "opportunities") is None
        assert catalog.order_params("Account", "nope") is None

    def test_order_without_order_by_is_ignored(self):
        metadata = Metadata({
            "entityDefs": {"Lead": {"links": {"calls": {"type": "hasMany", "order": "desc"}}}},
        })
        assert MetadataRelationCatalog(metadata).order_params("Lead", "calls") is None

    def test_default_direction_from_settings(self):
        metadata = Metadata({
            "entityDefs": {"Lead": {"links": {"calls": {"type": "hasMany", "orderBy": "dateStart"}}}},
            "relata": {"default_order": "desc"},
        })
        catalog = MetadataRelationCatalog(metadata)
        assert catalog.order_params("Lead", "calls") == OrderItem("dateStart", Direction.DESC)

    def test_relation_defs(self, catalog):
        defs = catalog.relation_defs("Account", "contacts")
        assert isinstance(defs, RelationDefs)
        assert defs.name == "contacts"
        assert defs.kind is RelationKind.HAS_MANY
        assert defs.get_param("entity") == "Contact"
        assert defs.get_param("missing", "x") == "x"

    def test_unknown_type_is_metadata_fault(self):
        metadata = Metadata({"entityDefs": {"Lead": {"links": {"x": {"type": "hasLots"}}}}})
        with pytest.raises(MetadataInvalidFault) as exc_info:
            MetadataRelationCatalog(metadata).kind_of("Lead", "x")
        assert exc_info.value.metadata["path"] == "entityDefs.Lead.links.x"

    def test_non_mapping_defs(self):
        metadata = Metadata({"entityDefs": {"Lead": {"links": {"x": "hasMany"}}}})
        with pytest.raises(MetadataInvalidFault):
            MetadataRelationCatalog(metadata).kind_of("Lead", "x")

    def test_built_from_loader(self, tmp_path):
        path = tmp_path / "entityDefs.yaml"
        path.write_text(
            "entityDefs:\n"
            "  Case:\n"
            "    links:\n"
            "      articles: {type: manyMany, orderBy: number, order: DESC}\n"
        )
        catalog = MetadataRelationCatalog(MetadataLoader.load([str(path)]))
        assert catalog.kind_of("Case", "articles") is RelationKind.MANY_MANY
        assert catalog.order_params("Case", "articles").direction is Direction.DESC
