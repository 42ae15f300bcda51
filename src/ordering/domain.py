"""Ordering bounded context: orders, their lines and discount pricing."""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
