"""Catalogue bounded context: products, their stock and the catalog."""

import structlog
from protean.domain import Domain

catalogue = Domain(name="catalogue")

logger = structlog.get_logger(__name__)
