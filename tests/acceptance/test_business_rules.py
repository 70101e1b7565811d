"""
Business rule enforcement acceptance tests.

Tests that the compliance rules hold end to end across the catalogs, the
function bindings and the employee ledger.
"""

import pytest
from datetime import date, timedelta

from sesmt import NotFoundException, ValidationException, create_engine
from sesmt.models import (
    ComplianceStatus,
    Employee,
    EquipmentItem,
    Exam,
    Provider,
    Sector,
    TriggerEvent
)


class TestExamScheduleBusinessRules:
    """Test exam registration and expiry rules."""

    @pytest.fixture(autouse=True)
    def setup_exam_rules_test(self):
        """Set up a fresh engine with one employee and one clinic."""
        self.engine = create_engine("memory", warning_window=timedelta(days=30))
        self.provider = self.engine.providers.register(Provider(name="Clínica Vida"))
        self.employee = self.engine.employees.register(Employee(name="João da Silva"))

    def test_periodic_exam_requires_interval(self):
        """Test a periodic exam without interval fails while a hiring one with interval succeeds."""
        with pytest.raises(ValidationException):
            self.engine.exams.register(Exam(name="Annual Checkup", trigger_events=[TriggerEvent.PERIODIC]))

        hiring = self.engine.exams.register(Exam(
            name="Annual Checkup", trigger_events=[TriggerEvent.HIRING], renewal_interval_months=12
        ))
        assert self.engine.exams.find_by_id(hiring.id) is not None

    def test_annual_checkup_lifecycle(self):
        """Test the yearly checkup moves from ExpiringSoon to Expired."""
        exam = self.engine.exams.register(Exam(
            name="Annual Checkup", trigger_events=[TriggerEvent.PERIODIC], renewal_interval_months=12
        ))

        record = self.engine.tracker.record_exam_performed(
            self.employee.id, exam.id, TriggerEvent.PERIODIC, date(2023, 1, 15), self.provider.id, "Fit"
        )
        assert record.expires_on == date(2024, 1, 15)

        december = self.engine.tracker.get_records_for_employee(self.employee.id, now=date(2023, 12, 20))
        february = self.engine.tracker.get_records_for_employee(self.employee.id, now=date(2024, 2, 1))

        assert december[0].status == ComplianceStatus.EXPIRING_SOON
        assert february[0].status == ComplianceStatus.EXPIRED

    def test_termination_record_for_hiring_exam_rejected(self):
        """Test no record is created when the trigger-event does not match."""
        exam = self.engine.exams.register(Exam(
            name="Clinical Exam",
            trigger_events=[TriggerEvent.HIRING, TriggerEvent.PERIODIC],
            renewal_interval_months=12
        ))

        with pytest.raises(ValidationException):
            self.engine.tracker.record_exam_performed(
                self.employee.id, exam.id, TriggerEvent.TERMINATION, date(2023, 1, 15), self.provider.id, "Fit"
            )

        assert self.engine.tracker.get_records_for_employee(self.employee.id) == []


class TestFunctionBindingBusinessRules:
    """Test requirement binding rules."""

    @pytest.fixture(autouse=True)
    def setup_binding_rules_test(self):
        """Set up a driver function with a helmet and gloves in the catalog."""
        self.engine = create_engine("memory")
        self.sector = self.engine.sectors.register(Sector(name="Transporte"))
        self.driver = self.engine.functions.create_function(self.sector.id, "Driver")
        self.helmet = self.engine.equipment.register_equipment(
            EquipmentItem(name="Helmet", certification_number="CA 1", shelf_life_months=24, mandatory=True)
        )
        self.gloves = self.engine.equipment.register_equipment(
            EquipmentItem(name="Gloves", certification_number="CA 2")
        )

    def test_equipment_set_is_replaced_not_merged(self):
        self.engine.functions.set_equipment(self.driver.id, [self.helmet.id])
        self.engine.functions.set_equipment(self.driver.id, [self.gloves.id])

        summary = self.engine.functions.get_requirements_summary(self.driver.id)
        assert [item.name for item in summary.equipment] == ["Gloves"]

    def test_distinct_exam_count_bounded_by_bucket_sum(self):
        shared = self.engine.exams.register(Exam(
            name="Clinical Exam",
            trigger_events=[TriggerEvent.HIRING, TriggerEvent.PERIODIC],
            renewal_interval_months=12
        ))
        audiometry = self.engine.exams.register(Exam(name="Audiometry", trigger_events=[TriggerEvent.HIRING]))

        self.engine.functions.set_exams_for_trigger(self.driver.id, TriggerEvent.HIRING, [shared.id, audiometry.id])
        self.engine.functions.set_exams_for_trigger(self.driver.id, TriggerEvent.PERIODIC, [shared.id])

        assert self.engine.functions.count_distinct_exams(self.driver.id) == 2

    def test_deactivated_equipment_cannot_be_bound(self):
        self.engine.equipment.set_equipment_active(self.gloves.id, False)

        with pytest.raises(NotFoundException):
            self.engine.functions.set_equipment(self.driver.id, [self.gloves.id])

    def test_referenced_sector_cannot_be_removed(self):
        with pytest.raises(ValidationException):
            self.engine.sectors.remove(self.sector.id)


class TestPendingRequirementBusinessRules:
    """Test the pending requirement report."""

    @pytest.fixture(autouse=True)
    def setup_pending_rules_test(self):
        """Set up a function requiring one exam and one equipment item."""
        self.engine = create_engine("memory")
        self.provider = self.engine.providers.register(Provider(name="Clínica Vida"))
        sector = self.engine.sectors.register(Sector(name="Transporte"))
        self.function = self.engine.functions.create_function(sector.id, "Driver")
        self.exam = self.engine.exams.register(Exam(
            name="Annual Checkup", trigger_events=[TriggerEvent.PERIODIC], renewal_interval_months=12
        ))
        self.helmet = self.engine.equipment.register_equipment(
            EquipmentItem(name="Helmet", certification_number="CA 1", shelf_life_months=24, mandatory=True)
        )
        self.engine.functions.set_exams_for_trigger(self.function.id, TriggerEvent.PERIODIC, [self.exam.id])
        self.engine.functions.set_equipment(self.function.id, [self.helmet.id])
        self.employee = self.engine.employees.register(Employee(name="Maria Souza", function_id=self.function.id))

    def test_pending_empty_only_when_everything_is_current(self):
        now = date(2023, 7, 1)
        assert len(self.engine.tracker.get_pending_for_function(self.employee.id, self.function.id, now=now)) == 2

        self.engine.tracker.record_exam_performed(
            self.employee.id, self.exam.id, TriggerEvent.PERIODIC, date(2023, 6, 1), self.provider.id, "Fit"
        )
        assert len(self.engine.tracker.get_pending_for_function(self.employee.id, self.function.id, now=now)) == 1

        self.engine.tracker.record_equipment_issued(self.employee.id, self.helmet.id, date(2023, 6, 1))
        assert self.engine.tracker.get_pending_for_function(self.employee.id, self.function.id, now=now) == []

        later = date(2024, 5, 15)
        pending = self.engine.tracker.get_pending_for_function(self.employee.id, self.function.id, now=later)
        assert [p.catalog_id for p in pending] == [self.exam.id]
