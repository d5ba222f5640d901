"""Domain events for the Taxonomy aggregate."""

from protean.fields import Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Taxonomy")
class TaxonomyCreated:
    """A new taxonomy was added to the catalogue."""

    __version__ = 1

    taxonomy_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)


@catalogue.event(part_of="Taxonomy")
class TaxonomyRenamed:
    """A taxonomy's display name was changed. Its slug is kept."""

    __version__ = 1

    taxonomy_id: Identifier(required=True)
    previous_name: String(required=True)
    name: String(required=True)
