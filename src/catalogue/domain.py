"""Catalogue bounded context: product taxonomies and their taxon trees."""

from protean.domain import Domain
from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
catalogue = Domain(name="catalogue")
