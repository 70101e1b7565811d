# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Engine factory wiring repositories and compliance services together.

The backend is chosen by the ``SESMT_STORAGE`` environment variable
(``memory`` or ``mongodb``) unless passed explicitly.
"""

import os
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .models.entities import (
    ComplianceRecord,
    DocumentTemplate,
    Employee,
    EquipmentItem,
    Exam,
    JobFunction,
    OccupationalDocument,
    Provider,
    Sector,
    UniformItem
)
from .services.catalog import CatalogService
from .services.compliance_tracker import ComplianceRecordTracker
from .services.employee_registry import EmployeeRegistry
from .services.equipment_catalog import EquipmentCatalog
from .services.exam_catalog import ExamCatalog
from .services.function_binding import FunctionRequirementBinding
from .services.mongodb import MongoDBService
from .services.occupational_documents import OccupationalDocumentRegistry
from .services.provider_directory import ProviderDirectory
from .services.repository import InMemoryRepository
from .services.sector_catalog import SectorCatalog

logger = logging.getLogger(__name__)

# Collection name -> entity model
COLLECTIONS = {
    "sectors": Sector,
    "providers": Provider,
    "exams": Exam,
    "equipment": EquipmentItem,
    "uniforms": UniformItem,
    "functions": JobFunction,
    "employees": Employee,
    "compliance_records": ComplianceRecord,
    "document_templates": DocumentTemplate,
    "occupational_documents": OccupationalDocument,
}


@dataclass
class ComplianceEngine:
    """All compliance services sharing one set of repositories."""
    sectors: SectorCatalog
    providers: ProviderDirectory
    exams: ExamCatalog
    equipment: EquipmentCatalog
    functions: FunctionRequirementBinding
    employees: EmployeeRegistry
    templates: CatalogService
    tracker: ComplianceRecordTracker
    occupational_documents: OccupationalDocumentRegistry


def create_engine(
    storage: Optional[str] = None,
    mongodb_service: Optional[MongoDBService] = None,
    warning_window: Optional[timedelta] = None
) -> ComplianceEngine:
    """
    Build a compliance engine over in-memory or MongoDB repositories.

    Args:
        storage: "memory" or "mongodb"; defaults to SESMT_STORAGE or "memory"
        mongodb_service: MongoDB service to use for the "mongodb" backend
        warning_window: Override of the expiring-soon window

    Returns:
        Wired ComplianceEngine
    """
    backend = (storage or os.getenv('SESMT_STORAGE', 'memory')).lower()

    if backend == "memory":
        repos = {name: InMemoryRepository(name) for name in COLLECTIONS}
    elif backend == "mongodb":
        service = mongodb_service or MongoDBService()
        repos = {name: service.repository(name, model) for name, model in COLLECTIONS.items()}
    else:
        raise ValueError(f"Unsupported storage backend: {backend}")

    sectors = SectorCatalog(repos["sectors"], repos["functions"])
    providers = ProviderDirectory(repos["providers"])
    exams = ExamCatalog(repos["exams"])
    equipment = EquipmentCatalog(repos["equipment"], repos["uniforms"])
    functions = FunctionRequirementBinding(repos["functions"], sectors, exams, equipment, providers)
    employees = EmployeeRegistry(repos["employees"], repos["functions"])
    templates = CatalogService(repos["document_templates"], "document_template")
    tracker = ComplianceRecordTracker(
        repos["compliance_records"],
        employees,
        exams,
        equipment,
        functions,
        providers=providers,
        templates=repos["document_templates"],
        warning_window=warning_window
    )
    occupational_documents = OccupationalDocumentRegistry(
        repos["occupational_documents"],
        warning_window=warning_window
    )

    logger.info(f"Compliance engine created with {backend} storage")
    return ComplianceEngine(
        sectors=sectors,
        providers=providers,
        exams=exams,
        equipment=equipment,
        functions=functions,
        employees=employees,
        templates=templates,
        tracker=tracker,
        occupational_documents=occupational_documents
    )
