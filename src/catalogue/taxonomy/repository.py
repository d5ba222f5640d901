"""Repository for the Taxonomy aggregate."""

from catalogue.domain import catalogue
from catalogue.taxonomy.taxonomy import Taxonomy


@catalogue.repository(part_of=Taxonomy)
class TaxonomyRepository:
    def find_by_slug(self, slug: str) -> Taxonomy | None:
        results = self._dao.query.filter(slug=slug).all().items
        return results[0] if results else None

    def find_by_name(self, name: str) -> Taxonomy | None:
        results = self._dao.query.filter(name=name).all().items
        return results[0] if results else None
