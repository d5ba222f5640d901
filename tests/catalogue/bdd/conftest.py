"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.taxon.exceptions import UniquenessError
from catalogue.taxon.tree import TaxonTree
from catalogue.taxonomy.taxonomy import Taxonomy
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def nodes():
    """Taxons created during a scenario, keyed by name."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a taxonomy named "{name}"'), target_fixture="taxonomy")
def taxonomy_named(name):
    taxonomy = Taxonomy.create(name=name)
    current_domain.repository_for(Taxonomy).add(taxonomy)
    return taxonomy


@given(parsers.cfparse('a taxon "{name}" at the root'))
def root_taxon(taxonomy, nodes, name):
    nodes[name] = TaxonTree().create(taxonomy.id, name)


@given(parsers.cfparse('a taxon "{name}" under "{parent}"'))
def child_taxon(taxonomy, nodes, name, parent):
    nodes[name] = TaxonTree().create(taxonomy.id, name, parent_id=nodes[parent].id)


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then("the action fails with a uniqueness error")
def action_fails_with_uniqueness_error(error):
    assert isinstance(error["exc"], UniquenessError), f"Got {error['exc']!r}"


@then("the action succeeds")
def action_succeeds(error):
    assert error["exc"] is None, f"Unexpected error: {error['exc']!r}"


@then(parsers.cfparse('the taxon "{name}" is at level {level:d}'))
def taxon_level_is(nodes, name, level):
    from catalogue.taxon.taxon import Taxon

    assert current_domain.repository_for(Taxon).get(nodes[name].id).level == level
