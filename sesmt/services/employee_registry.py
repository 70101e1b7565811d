# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Employee registry: the minimal employee data the compliance engine reads.
"""

import logging
from typing import List, Optional

from opentelemetry import trace

from ..models.entities import Employee, JobFunction
from .catalog import CatalogService
from .repository import Repository

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class EmployeeRegistry(CatalogService[Employee]):
    """Employees and the job function each one currently holds."""

    def __init__(self, repository: Repository[Employee], function_repository: Repository[JobFunction]):
        super().__init__(repository, "employee")
        self.functions = CatalogService(function_repository, "function")

    def assign_function(self, employee_id: str, function_id: Optional[str]) -> Employee:
        """
        Assign (or clear with None) an employee's job function.

        Raises:
            NotFoundException: If the employee or the function is missing or inactive
        """
        with tracer.start_as_current_span("employee.assign_function") as span:
            span.set_attributes({"sesmt.employee_id": employee_id, "sesmt.function_id": function_id or ""})

            employee = self.require_active(employee_id)
            if function_id is not None:
                self.functions.require_active(function_id)

            employee.function_id = function_id
            employee.touch()
            self.repository.upsert(employee)

            logger.info(
                "Assigned job function",
                extra={"employee_id": employee_id, "function_id": function_id}
            )
            return employee

    def list_by_function(self, function_id: str) -> List[Employee]:
        return [employee for employee in self.list_all() if employee.function_id == function_id]
