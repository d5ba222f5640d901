"""Taxonomy management: commands and handlers."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.shared.slug import generate_slug
from catalogue.taxon.exceptions import UniquenessError
from catalogue.taxon.tree import TaxonTree
from catalogue.taxonomy.taxonomy import Taxonomy


@catalogue.command(part_of="Taxonomy")
class CreateTaxonomy:
    name: String(required=True, max_length=255)
    slug: String(max_length=255)


@catalogue.command(part_of="Taxonomy")
class RenameTaxonomy:
    taxonomy_id: Identifier(required=True)
    name: String(required=True, max_length=255)


@catalogue.command(part_of="Taxonomy")
class DeleteTaxonomy:
    taxonomy_id: Identifier(required=True)


@catalogue.command_handler(part_of=Taxonomy)
class ManageTaxonomyHandler:
    @handle(CreateTaxonomy)
    def create_taxonomy(self, command):
        repo = current_domain.repository_for(Taxonomy)

        slug = command.slug or generate_slug(command.name)
        if repo.find_by_slug(slug) is not None:
            raise UniquenessError({"slug": [f"Slug '{slug}' is already used by another taxonomy"]})

        taxonomy = Taxonomy.create(name=command.name, slug=slug)
        repo.add(taxonomy)
        return str(taxonomy.id)

    @handle(RenameTaxonomy)
    def rename_taxonomy(self, command):
        repo = current_domain.repository_for(Taxonomy)
        taxonomy = repo.get(command.taxonomy_id)
        taxonomy.rename(command.name)
        repo.add(taxonomy)

    @handle(DeleteTaxonomy)
    def delete_taxonomy(self, command):
        taxonomy = current_domain.repository_for(Taxonomy).get(command.taxonomy_id)
        return TaxonTree().delete_taxonomy(taxonomy)
