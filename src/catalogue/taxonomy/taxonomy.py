"""Taxonomy aggregate root: a named grouping that owns taxon trees."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from catalogue.domain import catalogue
from catalogue.shared.slug import generate_slug


@catalogue.aggregate
class Taxonomy:
    """A flat, named classification scheme such as "Category" or "Brand".

    Taxons point back at their taxonomy through ``taxonomy_id``; the taxonomy
    itself holds no references to them. The slug is unique across taxonomies.
    """

    name: String(required=True, max_length=255)
    slug: String(required=True, max_length=255)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, slug=None):
        from catalogue.taxonomy.events import TaxonomyCreated

        slug = slug or generate_slug(name or "")
        if name and not slug:
            raise ValidationError({"slug": [f"Cannot derive a slug from '{name}'"]})

        now = datetime.now()
        taxonomy = cls(name=name, slug=slug, created_at=now, updated_at=now)
        taxonomy.raise_(
            TaxonomyCreated(
                taxonomy_id=taxonomy.id,
                name=taxonomy.name,
                slug=taxonomy.slug,
            )
        )
        return taxonomy

    def rename(self, name):
        from catalogue.taxonomy.events import TaxonomyRenamed

        previous_name = self.name
        self.name = name
        self.updated_at = datetime.now()

        self.raise_(
            TaxonomyRenamed(
                taxonomy_id=self.id,
                previous_name=previous_name,
                name=self.name,
            )
        )
