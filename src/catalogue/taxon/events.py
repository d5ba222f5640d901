"""Domain events for the Taxon aggregate."""

from protean.fields import Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Taxon")
class TaxonCreated:
    """A new taxon was added to a taxonomy tree."""

    __version__ = 1

    taxon_id: Identifier(required=True)
    taxonomy_id: Identifier(required=True)
    parent_id: Identifier()
    name: String(required=True)
    slug: String(required=True)
    priority: Integer(default=0)
    level: Integer(required=True)


@catalogue.event(part_of="Taxon")
class TaxonMoved:
    """A taxon was attached to a new parent or detached to the root level.

    Descendants are re-leveled along with the taxon but raise no events of
    their own.
    """

    __version__ = 1

    taxon_id: Identifier(required=True)
    taxonomy_id: Identifier(required=True)
    previous_parent_id: Identifier()
    parent_id: Identifier()
    previous_level: Integer(required=True)
    level: Integer(required=True)


@catalogue.event(part_of="Taxon")
class TaxonRenamed:
    """A taxon's display name was changed. Its slug is kept."""

    __version__ = 1

    taxon_id: Identifier(required=True)
    previous_name: String(required=True)
    name: String(required=True)


@catalogue.event(part_of="Taxon")
class TaxonReprioritized:
    """A taxon's sort priority was changed."""

    __version__ = 1

    taxon_id: Identifier(required=True)
    previous_priority: Integer()
    priority: Integer(required=True)


@catalogue.event(part_of="Taxon")
class TaxonSlugChanged:
    """A taxon received a new slug within its sibling group."""

    __version__ = 1

    taxon_id: Identifier(required=True)
    previous_slug: String(required=True)
    slug: String(required=True)
