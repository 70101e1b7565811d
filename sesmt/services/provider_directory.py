# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Directory of occupational clinics that perform exams.
"""

from typing import List

from ..models.entities import Provider
from .catalog import CatalogService
from .repository import Repository


class ProviderDirectory(CatalogService[Provider]):
    """Clinics referenced by exam price lists and exam records."""

    def __init__(self, repository: Repository[Provider]):
        super().__init__(repository, "provider")

    def search(self, term: str) -> List[Provider]:
        """Active clinics whose name or contact matches a term."""
        needle = term.strip().casefold()
        if not needle:
            return self.list_all()
        return [
            provider for provider in self.list_all()
            if needle in provider.name.casefold() or needle in (provider.contact or "").casefold()
        ]
