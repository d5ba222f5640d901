"""Repository for the Taxon aggregate.

Sibling queries load the taxonomy's nodes and filter the parent in Python:
"no parent" is a sibling group of its own, and null lookups are not portable
across providers.
"""

from catalogue.domain import catalogue
from catalogue.taxon.taxon import Taxon

# Upper bound for a single query; Protean querysets are paginated by default.
QUERY_LIMIT = 10_000


def _same_id(left, right) -> bool:
    if left is None or right is None:
        return left is None and right is None
    return str(left) == str(right)


@catalogue.repository(part_of=Taxon)
class TaxonRepository:
    def in_taxonomy(self, taxonomy_id) -> list[Taxon]:
        """All taxons of one taxonomy, in storage order."""
        return self._dao.query.filter(taxonomy_id=str(taxonomy_id)).limit(QUERY_LIMIT).all().items

    def children_of(self, parent_id) -> list[Taxon]:
        return self._dao.query.filter(parent_id=str(parent_id)).limit(QUERY_LIMIT).all().items

    def siblings(self, taxonomy_id, parent_id) -> list[Taxon]:
        """Taxons sharing ``taxonomy_id`` and ``parent_id`` (``None`` for roots)."""
        return [taxon for taxon in self.in_taxonomy(taxonomy_id) if _same_id(taxon.parent_id, parent_id)]

    def find_sibling_by_slug(self, taxonomy_id, parent_id, slug, exclude_id=None) -> Taxon | None:
        for taxon in self.siblings(taxonomy_id, parent_id):
            if taxon.slug == slug and not _same_id(taxon.id, exclude_id):
                return taxon
        return None
