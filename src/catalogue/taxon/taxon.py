"""Taxon aggregate root: a single node in a taxonomy's tree."""

from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.aggregate
class Taxon:
    """A node of a taxonomy tree, e.g. "Docking Stations" under "Accessories".

    The tree is stored as parent references: ``parent_id`` points at another
    taxon of the same taxonomy, or is empty for root-level taxons. ``level`` is
    derived from the parent chain (root = 0) and is only ever written through
    ``create``, ``attach_to``, ``detach`` and ``relevel``.
    """

    taxonomy_id: Identifier(required=True)
    parent_id: Identifier()
    name: String(required=True, max_length=255)
    slug: String(required=True, max_length=255)
    priority: Integer(default=0)
    level: Integer(default=0, min_value=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def level_must_follow_parent_presence(self):
        if self.parent_id is None and self.level != 0:
            raise ValidationError({"level": ["Root-level taxons must sit at level 0"]})
        if self.parent_id is not None and self.level < 1:
            raise ValidationError({"level": ["Taxons with a parent must sit below level 0"]})

    @invariant.post
    def cannot_be_own_parent(self):
        if self.parent_id is not None and str(self.parent_id) == str(self.id):
            raise ValidationError({"parent_id": ["A taxon cannot be its own parent"]})

    @classmethod
    def create(cls, taxonomy_id, name, slug, parent=None, priority=0):
        from catalogue.taxon.events import TaxonCreated

        if parent is not None and str(parent.taxonomy_id) != str(taxonomy_id):
            raise ValidationError({"parent_id": ["Parent taxon belongs to a different taxonomy"]})

        now = datetime.now()
        taxon = cls(
            taxonomy_id=taxonomy_id,
            parent_id=parent.id if parent is not None else None,
            name=name,
            slug=slug,
            priority=priority if priority is not None else 0,
            level=parent.level + 1 if parent is not None else 0,
            created_at=now,
            updated_at=now,
        )
        taxon.raise_(
            TaxonCreated(
                taxon_id=taxon.id,
                taxonomy_id=taxon.taxonomy_id,
                parent_id=taxon.parent_id,
                name=taxon.name,
                slug=taxon.slug,
                priority=taxon.priority,
                level=taxon.level,
            )
        )
        return taxon

    def is_root_level(self) -> bool:
        return self.parent_id is None

    def attach_to(self, parent):
        """Hang this taxon under ``parent`` and take the level below it.

        Cycle checks need the stored tree and happen in ``TaxonTree``; here
        only what the two aggregates can tell on their own is verified.
        """
        if str(parent.taxonomy_id) != str(self.taxonomy_id):
            raise ValidationError({"parent_id": ["Parent taxon belongs to a different taxonomy"]})
        if str(parent.id) == str(self.id):
            raise ValidationError({"parent_id": ["A taxon cannot be its own parent"]})

        self._move(parent.id, parent.level + 1)

    def detach(self):
        self._move(None, 0)

    def relevel(self, level):
        """Adopt a level recomputed from an ancestor's move. No event is raised."""
        if level != self.level:
            self.level = level

    def rename(self, name):
        from catalogue.taxon.events import TaxonRenamed

        previous_name = self.name
        self.name = name
        self.updated_at = datetime.now()

        self.raise_(
            TaxonRenamed(
                taxon_id=self.id,
                previous_name=previous_name,
                name=self.name,
            )
        )

    def reprioritize(self, priority):
        from catalogue.taxon.events import TaxonReprioritized

        previous_priority = self.priority
        self.priority = priority
        self.updated_at = datetime.now()

        self.raise_(
            TaxonReprioritized(
                taxon_id=self.id,
                previous_priority=previous_priority,
                priority=priority,
            )
        )

    def change_slug(self, slug):
        from catalogue.taxon.events import TaxonSlugChanged

        previous_slug = self.slug
        self.slug = slug
        self.updated_at = datetime.now()

        self.raise_(
            TaxonSlugChanged(
                taxon_id=self.id,
                previous_slug=previous_slug,
                slug=slug,
            )
        )

    def _move(self, parent_id, level):
        from catalogue.taxon.events import TaxonMoved

        previous_parent_id = self.parent_id
        previous_level = self.level

        with atomic_change(self):
            self.parent_id = parent_id
            self.level = level
            self.updated_at = datetime.now()

        self.raise_(
            TaxonMoved(
                taxon_id=self.id,
                taxonomy_id=self.taxonomy_id,
                previous_parent_id=previous_parent_id,
                parent_id=parent_id,
                previous_level=previous_level,
                level=level,
            )
        )
