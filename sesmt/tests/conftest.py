# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and fixtures.
"""

import os
import pytest
from datetime import date, timedelta
from decimal import Decimal

from sesmt.engine import create_engine
from sesmt.models import (
    Address,
    DocumentTemplate,
    Employee,
    EquipmentItem,
    Exam,
    Provider,
    Sector,
    TriggerEvent,
    UniformItem
)

# Set test environment
os.environ['ENVIRONMENT'] = 'test'
os.environ['OTEL_ENABLED'] = 'false'


@pytest.fixture
def warning_window():
    """Default expiring-soon window."""
    return timedelta(days=30)


@pytest.fixture
def engine(warning_window):
    """Compliance engine over in-memory repositories."""
    return create_engine("memory", warning_window=warning_window)


@pytest.fixture
def sector(engine):
    """Registered active sector."""
    return engine.sectors.register(Sector(name="Transporte", description="Frota de caminhões"))


@pytest.fixture
def provider(engine):
    """Registered occupational clinic."""
    return engine.providers.register(
        Provider(name="Clínica Vida", contact="Dra. Ana", phone="(11) 3333-4444")
    )


@pytest.fixture
def other_provider(engine):
    """Second clinic without any price list."""
    return engine.providers.register(Provider(name="Centro Médico Norte"))


@pytest.fixture
def annual_checkup(engine, provider):
    """Periodic exam renewed every 12 months."""
    return engine.exams.register(Exam(
        name="Annual Checkup",
        trigger_events=[TriggerEvent.PERIODIC],
        renewal_interval_months=12,
        prices={provider.id: Decimal("80.00")}
    ))


@pytest.fixture
def clinical_exam(engine, provider):
    """Exam applicable at hiring and periodically."""
    return engine.exams.register(Exam(
        name="Clinical Exam",
        trigger_events=[TriggerEvent.HIRING, TriggerEvent.PERIODIC],
        renewal_interval_months=12,
        prices={provider.id: Decimal("120.00")}
    ))


@pytest.fixture
def audiometry(engine):
    """Hiring-only exam that never expires."""
    return engine.exams.register(Exam(
        name="Audiometry",
        trigger_events=[TriggerEvent.HIRING],
        preparation_instructions="14 hours of auditory rest"
    ))


@pytest.fixture
def helmet(engine):
    """Mandatory equipment item with a two-year shelf-life."""
    return engine.equipment.register_equipment(EquipmentItem(
        name="Helmet",
        certification_number="CA 12345",
        shelf_life_months=24,
        mandatory=True
    ))


@pytest.fixture
def gloves(engine):
    """Optional equipment item without shelf-life."""
    return engine.equipment.register_equipment(EquipmentItem(
        name="Gloves",
        certification_number="CA 54321",
        mandatory=False
    ))


@pytest.fixture
def shirt(engine):
    """Uniform piece."""
    return engine.equipment.register_uniform(UniformItem(description="Work shirt", category="Shirt"))


@pytest.fixture
def driver(engine, sector):
    """Job function without requirements."""
    return engine.functions.create_function(sector.id, "Driver", duties=["Drive trucks", "Check load"])


@pytest.fixture
def sample_address():
    """Employee postal address."""
    return Address(
        street="Rua das Flores",
        number="123",
        complement="Apto 4",
        district="Centro",
        city="São Paulo",
        state="SP",
        zip_code="01000-000"
    )


@pytest.fixture
def employee(engine, driver, sample_address):
    """Registered employee holding the driver function."""
    return engine.employees.register(Employee(
        name="João da Silva",
        cpf="123.456.789-00",
        rg="12.345.678-9",
        admission_date=date(2022, 3, 1),
        position="Motorista",
        salary=Decimal("2500.00"),
        address=sample_address,
        function_id=driver.id
    ))


@pytest.fixture
def declaration_template(engine):
    """Document template valid for 12 months."""
    return engine.templates.register(DocumentTemplate(
        title="Declaração de Recebimento de EPI",
        content="Eu, {NOME}, CPF {CPF}, declaro ter recebido os EPIs da {EMPRESA} em {DATA_ATUAL}.",
        validity_months=12
    ))
