# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
SESMT occupational health and safety compliance engine.

Catalogs of exams, protective equipment, uniforms, sectors and providers;
job functions bound to their requirements; and a per-employee ledger whose
statuses are derived at read time.
"""

from .engine import ComplianceEngine, create_engine
from .errors import CustomException, NotFoundException, ValidationException

__version__ = "1.0.0"

__all__ = [
    "ComplianceEngine",
    "create_engine",
    "CustomException",
    "NotFoundException",
    "ValidationException",
    "__version__"
]
