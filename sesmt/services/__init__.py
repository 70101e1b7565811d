# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Services package - Catalogs, ledger and persistence adapters.
"""

from .repository import Repository, InMemoryRepository
from .mongodb import MongoDBService, MongoRepository, get_mongodb_service, close_mongodb_connection
from .catalog import CatalogService
from .exam_catalog import ExamCatalog
from .equipment_catalog import EquipmentCatalog
from .sector_catalog import SectorCatalog
from .provider_directory import ProviderDirectory
from .employee_registry import EmployeeRegistry
from .function_binding import FunctionRequirementBinding
from .compliance_tracker import ComplianceRecordTracker
from .occupational_documents import OccupationalDocumentRegistry

__all__ = [
    "Repository",
    "InMemoryRepository",
    "MongoDBService",
    "MongoRepository",
    "get_mongodb_service",
    "close_mongodb_connection",
    "CatalogService",
    "ExamCatalog",
    "EquipmentCatalog",
    "SectorCatalog",
    "ProviderDirectory",
    "EmployeeRegistry",
    "FunctionRequirementBinding",
    "ComplianceRecordTracker",
    "OccupationalDocumentRegistry"
]
