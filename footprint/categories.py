"""User-maintained mapping of site categories to domains.

The map is stored under ``userCategories`` as ``{category: [domain, ...]}``.
A category exists only while it has at least one domain, and a domain is
listed at most once per category. The same domain may sit in several
categories.
"""

from __future__ import annotations

import logging

from footprint.domain import normalize_domain
from footprint.models import (
    USER_CATEGORIES_KEY,
    CategoryMap,
    ErrorKind,
    OperationResult,
    StatusMessage,
)
from footprint.storage import Storage

logger = logging.getLogger(__name__)


class CategoryStore:
    """Add, remove and clear user category assignments."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def load(self) -> CategoryMap:
        """Read the stored category map, or an empty one."""
        data = await self.storage.get([USER_CATEGORIES_KEY])
        stored = data.get(USER_CATEGORIES_KEY) or {}
        return {category: list(domains) for category, domains in stored.items()}

    async def _save(self, categories: CategoryMap) -> None:
        await self.storage.set({USER_CATEGORIES_KEY: categories})

    async def add_domain(self, category: str, raw_url: str) -> OperationResult:
        """Assign a site to a category.

        Args:
            category: Category name.
            raw_url: URL or host as typed by the user.

        Returns:
            Success with the normalized domain, or a failure with
            ``INVALID_INPUT`` (blank category or URL) or ``DUPLICATE_ENTRY``.
            Failures leave storage untouched.
        """
        if not category or not category.strip():
            return OperationResult.failure(
                ErrorKind.INVALID_INPUT,
                StatusMessage.INVALID_CATEGORY,
                category=category,
            )

        if not raw_url or not raw_url.strip():
            return OperationResult.failure(
                ErrorKind.INVALID_INPUT,
                StatusMessage.INVALID_URL,
                category=category,
            )

        domain = normalize_domain(raw_url)
        categories = await self.load()
        domains = categories.setdefault(category, [])

        if domain in domains:
            logger.debug(f"{domain} already in category '{category}'")
            return OperationResult.failure(
                ErrorKind.DUPLICATE_ENTRY,
                StatusMessage.DUPLICATE_SITE,
                domain=domain,
                category=category,
            )

        domains.append(domain)
        await self._save(categories)
        logger.info(f"Added {domain} to category '{category}'")
        return OperationResult.success(
            StatusMessage.added(domain, category),
            domain=domain,
            category=category,
        )

    async def remove_domain(self, category: str, domain: str) -> OperationResult:
        """Remove a site from a category.

        Removing a domain that is not there is not an error. A category left
        without domains is deleted. The map is written back either way.
        """
        categories = await self.load()
        if category in categories:
            categories[category] = [d for d in categories[category] if d != domain]
            if not categories[category]:
                del categories[category]

        await self._save(categories)
        logger.info(f"Removed {domain} from category '{category}'")
        return OperationResult.success(
            StatusMessage.removed(domain, category),
            domain=domain,
            category=category,
        )

    async def clear(self) -> None:
        """Drop every category."""
        await self._save({})
        logger.info("User categories cleared")

    async def categorize(self, url: str) -> list[str]:
        """Categories that list the domain of ``url``, in map order."""
        domain = normalize_domain(url)
        categories = await self.load()
        return [category for category, domains in categories.items() if domain in domains]
