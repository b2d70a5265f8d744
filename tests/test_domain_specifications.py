"""Tests for query specifications and filter construction."""
from __future__ import annotations

import re

import pytest

from inventory_api.domain.specifications import (
    AndSpecification,
    FrameworkIn,
    MatchAll,
    OrSpecification,
    OwnedBy,
    PurchasedBy,
    TextSearch,
    build_model_query,
    parse_csv,
)


class TestComposition:
    """Test AND/OR composition of specifications."""

    def test_match_all_is_empty_filter(self):
        """Match-all renders as the empty filter."""
        assert MatchAll().to_query() == {}

    def test_match_all_is_identity_for_and(self):
        """AND with match-all yields the other side unchanged."""
        owned = OwnedBy("a@x.com")
        assert MatchAll().and_(owned) is owned

    def test_and_combines_both_sides(self):
        """AND of two filters uses $and."""
        spec = OwnedBy("a@x.com").and_(PurchasedBy("b@x.com"))

        assert isinstance(spec, AndSpecification)
        assert spec.to_query() == {"$and": [{"createdBy": "a@x.com"}, {"purchasedBy": "b@x.com"}]}

    def test_and_drops_empty_side(self):
        """AND with an empty side collapses to the other side."""
        spec = AndSpecification(OwnedBy("a@x.com"), FrameworkIn([]))
        assert spec.to_query() == {"createdBy": "a@x.com"}

    def test_or_combines_both_sides(self):
        """OR of two filters uses $or."""
        spec = OwnedBy("a@x.com").or_(PurchasedBy("a@x.com"))

        assert isinstance(spec, OrSpecification)
        assert spec.to_query() == {"$or": [{"createdBy": "a@x.com"}, {"purchasedBy": "a@x.com"}]}

    def test_or_with_match_all_matches_everything(self):
        """OR with match-all is match-all."""
        assert OwnedBy("a@x.com").or_(MatchAll()).to_query() == {}


class TestTextSearch:
    """Test substring search rendering."""

    def test_single_field(self):
        """One field renders a single case-insensitive regex condition."""
        assert TextSearch("bert").to_query() == {"name": {"$regex": "bert", "$options": "i"}}

    def test_multiple_fields_use_or(self):
        """Several fields render an $or of regex conditions."""
        query = TextSearch("vision", ("name", "framework", "dataset")).to_query()

        assert set(query) == {"$or"}
        assert [list(clause)[0] for clause in query["$or"]] == ["name", "framework", "dataset"]

    def test_term_is_escaped(self):
        """Regex metacharacters are matched literally."""
        query = TextSearch("c++ (beta)").to_query()
        pattern = query["name"]["$regex"]

        assert re.search(pattern, "my C++ (beta) model", re.IGNORECASE)
        assert not re.search(pattern, "cc (beta)", re.IGNORECASE)

    def test_requires_fields(self):
        """An empty field list is rejected."""
        with pytest.raises(ValueError):
            TextSearch("x", ())


class TestFrameworkIn:
    """Test framework set filter rendering."""

    def test_anchored_case_insensitive(self):
        """Values match exactly, ignoring case."""
        query = FrameworkIn(["tensorflow"]).to_query()
        pattern = query["framework"]["$regex"]
        assert query["framework"]["$options"] == "i"

        assert re.search(pattern, "TensorFlow", re.IGNORECASE)
        assert re.search(pattern, "Tensorflow", re.IGNORECASE)
        assert not re.search(pattern, "TensorFlow Lite", re.IGNORECASE)
        assert not re.search(pattern, "PyTorch", re.IGNORECASE)

    def test_multiple_values(self):
        """Any listed value matches."""
        pattern = FrameworkIn(["TensorFlow", "PyTorch"]).to_query()["framework"]["$regex"]

        assert re.search(pattern, "pytorch", re.IGNORECASE)
        assert re.search(pattern, "tensorflow", re.IGNORECASE)
        assert not re.search(pattern, "JAX", re.IGNORECASE)

    def test_empty_list_is_no_filter(self):
        """An empty list does not restrict results."""
        assert FrameworkIn([]).to_query() == {}


class TestBuildModelQuery:
    """Test the query builder used by the search routes."""

    def test_no_parameters(self):
        """No parameters match everything."""
        assert build_model_query() == {}
        assert build_model_query(search="   ", framework=" , ") == {}

    def test_search_only(self):
        """Search alone renders the text search."""
        assert "$or" in build_model_query(search="net")

    def test_framework_only(self):
        """Framework alone renders the set filter."""
        assert "framework" in build_model_query(framework="TensorFlow,PyTorch")

    def test_search_and_framework_combine_with_and(self):
        """Both parameters combine with AND."""
        query = build_model_query(search="net", framework="PyTorch")

        assert list(query) == ["$and"]
        assert len(query["$and"]) == 2

    def test_name_only_fields(self):
        """Search fields can be narrowed to the name."""
        assert build_model_query(search="net", search_fields=("name",)) == {
            "name": {"$regex": "net", "$options": "i"}
        }


class TestParseCsv:
    """Test comma-separated parameter parsing."""

    def test_trims_and_drops_empty(self):
        assert parse_csv(" TensorFlow , ,PyTorch,") == ["TensorFlow", "PyTorch"]

    def test_none(self):
        assert parse_csv(None) == []
