"""Taxon management: commands and handlers.

Each handler method runs in its own unit of work, so a structural change
(create with its uniqueness check, a move with its subtree re-level, a
cascading delete) is committed as a whole or not at all.
"""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.taxon.taxon import Taxon
from catalogue.taxon.tree import TaxonTree


@catalogue.command(part_of="Taxon")
class CreateTaxon:
    taxonomy_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    parent_id: Identifier()
    slug: String(max_length=255)
    priority: Integer(default=0)


@catalogue.command(part_of="Taxon")
class AttachTaxon:
    taxon_id: Identifier(required=True)
    parent_id: Identifier(required=True)


@catalogue.command(part_of="Taxon")
class DetachTaxon:
    taxon_id: Identifier(required=True)


@catalogue.command(part_of="Taxon")
class RenameTaxon:
    taxon_id: Identifier(required=True)
    name: String(required=True, max_length=255)


@catalogue.command(part_of="Taxon")
class ReprioritizeTaxon:
    taxon_id: Identifier(required=True)
    priority: Integer(required=True)


@catalogue.command(part_of="Taxon")
class ChangeTaxonSlug:
    taxon_id: Identifier(required=True)
    slug: String(required=True, max_length=255)


@catalogue.command(part_of="Taxon")
class DeleteTaxon:
    taxon_id: Identifier(required=True)


@catalogue.command_handler(part_of=Taxon)
class ManageTaxonHandler:
    @handle(CreateTaxon)
    def create_taxon(self, command):
        taxon = TaxonTree().create(
            taxonomy_id=command.taxonomy_id,
            name=command.name,
            parent_id=command.parent_id,
            slug=command.slug,
            priority=command.priority,
        )
        return str(taxon.id)

    @handle(AttachTaxon)
    def attach_taxon(self, command):
        repo = current_domain.repository_for(Taxon)
        taxon = repo.get(command.taxon_id)
        parent = repo.get(command.parent_id)
        TaxonTree().attach_parent(taxon, parent)

    @handle(DetachTaxon)
    def detach_taxon(self, command):
        taxon = current_domain.repository_for(Taxon).get(command.taxon_id)
        TaxonTree().detach_parent(taxon)

    @handle(RenameTaxon)
    def rename_taxon(self, command):
        taxon = current_domain.repository_for(Taxon).get(command.taxon_id)
        TaxonTree().rename(taxon, command.name)

    @handle(ReprioritizeTaxon)
    def reprioritize_taxon(self, command):
        taxon = current_domain.repository_for(Taxon).get(command.taxon_id)
        TaxonTree().reprioritize(taxon, command.priority)

    @handle(ChangeTaxonSlug)
    def change_taxon_slug(self, command):
        taxon = current_domain.repository_for(Taxon).get(command.taxon_id)
        TaxonTree().change_slug(taxon, command.slug)

    @handle(DeleteTaxon)
    def delete_taxon(self, command):
        taxon = current_domain.repository_for(Taxon).get(command.taxon_id)
        return TaxonTree().delete(taxon)
