"""Taxon tree engine: structural operations over stored taxons.

Taxons reference their parent by id, so every walk goes through the
repository rather than through object references. Writes are checked here
before they reach the store:

- a parent must belong to the taxon's own taxonomy,
- a taxon can never be placed below itself or one of its descendants,
- slugs are unique within a sibling group (same taxonomy, same parent).

Reparenting re-levels the moved taxon and its whole subtree eagerly, so
``level`` can be queried without walking the tree. A re-level leaves copies
held elsewhere stale, so every write reloads its taxons by id first and
returns the stored copy it changed.

The engine does not commit on its own. Command handlers in
``catalogue.taxon.management`` call it inside their unit of work, which makes
each structural change atomic.
"""

from collections import deque
from collections.abc import Iterable, Iterator

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from catalogue.shared.slug import generate_slug
from catalogue.taxon.exceptions import IntegrityError, UniquenessError
from catalogue.taxon.taxon import Taxon
from catalogue.taxonomy.taxonomy import Taxonomy

logger = structlog.get_logger(__name__)


def _id_of(taxonomy_or_id) -> str:
    if isinstance(taxonomy_or_id, Taxonomy):
        return str(taxonomy_or_id.id)
    return str(taxonomy_or_id)


def _same(left, right) -> bool:
    return str(left) == str(right)


class TaxonTree:
    """Create, move, traverse and prune taxons of any taxonomy."""

    def __init__(self, taxons=None, taxonomies=None):
        self.taxons = taxons if taxons is not None else current_domain.repository_for(Taxon)
        self.taxonomies = taxonomies if taxonomies is not None else current_domain.repository_for(Taxonomy)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self, taxonomy_id, name, parent_id=None, slug=None, priority=0) -> Taxon:
        """Add a taxon to a taxonomy, optionally below ``parent_id``.

        The slug is derived from ``name`` unless given explicitly; an
        explicit slug is stored as is.
        """
        if name is None or not str(name).strip():
            raise ValidationError({"name": ["Taxon name is required"]})

        taxonomy = self._taxonomy(taxonomy_id)

        parent = None
        if parent_id is not None:
            parent = self._parent(parent_id)
            if not _same(parent.taxonomy_id, taxonomy.id):
                raise ValidationError({"parent_id": ["Parent taxon belongs to a different taxonomy"]})

        if not slug:
            slug = generate_slug(name)
            if not slug:
                raise ValidationError({"slug": [f"Cannot derive a slug from '{name}'"]})

        self._ensure_slug_available(taxonomy.id, parent.id if parent else None, slug)

        taxon = Taxon.create(
            taxonomy_id=taxonomy.id,
            name=name,
            slug=slug,
            parent=parent,
            priority=priority,
        )
        self.taxons.add(taxon)

        logger.info(
            "Taxon created",
            taxon_id=str(taxon.id),
            taxonomy_id=str(taxon.taxonomy_id),
            parent_id=str(taxon.parent_id) if taxon.parent_id else None,
            slug=taxon.slug,
            level=taxon.level,
        )
        return taxon

    def attach_parent(self, taxon: Taxon, parent: Taxon) -> Taxon:
        taxon = self._stored(taxon)
        parent = self._stored(parent)

        if not _same(parent.taxonomy_id, taxon.taxonomy_id):
            raise ValidationError({"parent_id": ["Parent taxon belongs to a different taxonomy"]})
        if _same(parent.id, taxon.id):
            raise ValidationError({"parent_id": ["A taxon cannot be its own parent"]})
        if any(_same(ancestor.id, taxon.id) for ancestor in self.ancestors(parent)):
            raise ValidationError({"parent_id": ["Cannot attach a taxon below one of its own descendants"]})

        self._ensure_slug_available(taxon.taxonomy_id, parent.id, taxon.slug, exclude_id=taxon.id)

        taxon.attach_to(parent)
        self.taxons.add(taxon)
        moved = self._relevel_descendants(taxon)

        logger.info(
            "Taxon attached",
            taxon_id=str(taxon.id),
            parent_id=str(parent.id),
            level=taxon.level,
            releveled_descendants=moved,
        )
        return taxon

    def detach_parent(self, taxon: Taxon) -> Taxon:
        taxon = self._stored(taxon)
        if taxon.is_root_level():
            return taxon

        self._ensure_slug_available(taxon.taxonomy_id, None, taxon.slug, exclude_id=taxon.id)

        taxon.detach()
        self.taxons.add(taxon)
        moved = self._relevel_descendants(taxon)

        logger.info("Taxon detached", taxon_id=str(taxon.id), releveled_descendants=moved)
        return taxon

    def rename(self, taxon: Taxon, name: str) -> Taxon:
        if name is None or not str(name).strip():
            raise ValidationError({"name": ["Taxon name is required"]})

        taxon = self._stored(taxon)
        taxon.rename(name)
        self.taxons.add(taxon)
        return taxon

    def reprioritize(self, taxon: Taxon, priority: int) -> Taxon:
        taxon = self._stored(taxon)
        taxon.reprioritize(priority)
        self.taxons.add(taxon)
        return taxon

    def change_slug(self, taxon: Taxon, slug: str) -> Taxon:
        if not slug:
            raise ValidationError({"slug": ["Slug cannot be empty"]})

        taxon = self._stored(taxon)
        if slug == taxon.slug:
            return taxon

        self._ensure_slug_available(taxon.taxonomy_id, taxon.parent_id, slug, exclude_id=taxon.id)

        taxon.change_slug(slug)
        self.taxons.add(taxon)
        return taxon

    def delete(self, taxon: Taxon) -> int:
        """Delete ``taxon`` together with its subtree, deepest nodes first.

        Returns the number of taxons removed.
        """
        taxon = self._stored(taxon)
        doomed = [taxon, *self.descendants(taxon)]
        for node in reversed(doomed):
            self.taxons._dao.delete(node)

        logger.info("Taxon deleted", taxon_id=str(taxon.id), removed=len(doomed))
        return len(doomed)

    def delete_taxonomy(self, taxonomy: Taxonomy) -> int:
        """Delete a taxonomy and every taxon in it. Returns the taxon count."""
        doomed = sorted(self.by_taxonomy(taxonomy), key=lambda node: node.level, reverse=True)
        for node in doomed:
            self.taxons._dao.delete(node)
        self.taxonomies._dao.delete(taxonomy)

        logger.info("Taxonomy deleted", taxonomy_id=str(taxonomy.id), removed_taxons=len(doomed))
        return len(doomed)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def ancestors(self, taxon: Taxon) -> list[Taxon]:
        """Parents of ``taxon`` from the root down to its immediate parent."""
        chain = []
        visited = {str(taxon.id)}

        parent_id = taxon.parent_id
        while parent_id is not None:
            if str(parent_id) in visited:
                raise IntegrityError({"parent_id": [f"Cycle detected in the parent chain of taxon {taxon.id}"]})
            visited.add(str(parent_id))

            parent = self.taxons.get(parent_id)
            chain.append(parent)
            parent_id = parent.parent_id

        chain.reverse()
        return chain

    def children(self, taxon: Taxon) -> list[Taxon]:
        """Direct children of ``taxon``, in no particular order."""
        return self.taxons.children_of(taxon.id)

    def descendants(self, taxon: Taxon) -> list[Taxon]:
        """Every taxon below ``taxon``, breadth first."""
        found = []
        visited = {str(taxon.id)}
        queue = deque([taxon.id])

        while queue:
            for child in self.taxons.children_of(queue.popleft()):
                if str(child.id) in visited:
                    raise IntegrityError({"parent_id": [f"Cycle detected below taxon {taxon.id}"]})
                visited.add(str(child.id))
                found.append(child)
                queue.append(child.id)

        return found

    def is_root_level(self, taxon: Taxon) -> bool:
        return taxon.is_root_level()

    def by_taxonomy(self, taxonomy_or_id) -> Iterator[Taxon]:
        """Lazily yield the taxons of one taxonomy.

        Accepts a ``Taxonomy`` or its raw id. Nothing is fetched until the
        result is iterated.
        """
        yield from self.taxons.in_taxonomy(_id_of(taxonomy_or_id))

    def roots(self, taxonomy_or_id) -> list[Taxon]:
        return [taxon for taxon in self.by_taxonomy(taxonomy_or_id) if taxon.is_root_level()]

    @staticmethod
    def sort_by_priority(taxons: Iterable[Taxon], reverse: bool = False) -> list[Taxon]:
        """Order by ascending priority; equal priorities keep their input order."""
        return sorted(taxons, key=lambda taxon: taxon.priority or 0, reverse=reverse)

    def path(self, taxon: Taxon) -> str:
        """Slash-separated slugs from the root down to ``taxon``."""
        return "/".join(node.slug for node in [*self.ancestors(taxon), taxon])

    def find_by_path(self, taxonomy_or_id, path: str) -> Taxon | None:
        taxonomy_id = _id_of(taxonomy_or_id)
        segments = [segment for segment in (path or "").split("/") if segment]

        node = None
        parent_id = None
        for segment in segments:
            node = self.taxons.find_sibling_by_slug(taxonomy_id, parent_id, segment)
            if node is None:
                return None
            parent_id = node.id

        return node

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _taxonomy(self, taxonomy_or_id) -> Taxonomy:
        if taxonomy_or_id is None or taxonomy_or_id == "":
            raise ValidationError({"taxonomy_id": ["Taxonomy is required"]})
        try:
            return self.taxonomies.get(_id_of(taxonomy_or_id))
        except ObjectNotFoundError:
            raise ValidationError({"taxonomy_id": [f"Unknown taxonomy {_id_of(taxonomy_or_id)}"]}) from None

    def _stored(self, taxon: Taxon) -> Taxon:
        return self.taxons.get(taxon.id)

    def _parent(self, parent_id) -> Taxon:
        try:
            return self.taxons.get(parent_id)
        except ObjectNotFoundError:
            raise ValidationError({"parent_id": [f"Unknown parent taxon {parent_id}"]}) from None

    def _ensure_slug_available(self, taxonomy_id, parent_id, slug, exclude_id=None) -> None:
        clash = self.taxons.find_sibling_by_slug(taxonomy_id, parent_id, slug, exclude_id=exclude_id)
        if clash is not None:
            raise UniquenessError({"slug": [f"Slug '{slug}' is already used by a sibling taxon"]})

    def _relevel_descendants(self, taxon: Taxon) -> int:
        moved = 0
        visited = {str(taxon.id)}
        queue = deque([(taxon.id, taxon.level)])

        while queue:
            parent_id, parent_level = queue.popleft()
            for child in self.taxons.children_of(parent_id):
                if str(child.id) in visited:
                    raise IntegrityError({"parent_id": [f"Cycle detected below taxon {taxon.id}"]})
                visited.add(str(child.id))

                child.relevel(parent_level + 1)
                self.taxons.add(child)
                moved += 1
                queue.append((child.id, child.level))

        return moved
