# SPDX-License-Identifier: Apache-2.0

"""
Document template rendering and occupational document rules.

Templates use ``{TOKEN}`` placeholders. Known tokens are replaced with
employee data; unknown tokens are left verbatim.
"""

import re
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from ..models.entities import Employee, OccupationalDocument
from .validation import ValidationResult

DEFAULT_COMPANY_NAME = "CONSERVIAS TRANSPORTES E PAVIMENTAÇÃO LTDA"

PLACEHOLDER_PATTERN = re.compile(r"\{([A-Z_]+)\}")

# Token -> human-readable description, in the order shown to template authors
DOCUMENT_VARIABLES: Dict[str, str] = {
    "NOME": "Nome completo do funcionário",
    "CPF": "CPF do funcionário",
    "RG": "RG do funcionário",
    "DATA_ADMISSAO": "Data de admissão do funcionário",
    "CARGO": "Cargo do funcionário",
    "SALARIO": "Salário do funcionário",
    "ENDERECO": "Endereço completo do funcionário",
    "DATA_ATUAL": "Data atual",
    "EMPRESA": "Nome da empresa",
}


def format_date(value: Optional[date]) -> str:
    """Format a date as dd/mm/yyyy; empty for missing dates."""
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")


def format_currency(value: Optional[Decimal]) -> str:
    """Format an amount as Brazilian reais, e.g. ``R$ 1.234,56``."""
    if value is None:
        return ""
    amount = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    integer_part, _, cents = f"{abs(amount):,.2f}".partition(".")
    sign = "-" if amount < 0 else ""
    return f"{sign}R$ {integer_part.replace(',', '.')},{cents}"


def build_substitutions(
    employee: Employee,
    today: date,
    company_name: str = DEFAULT_COMPANY_NAME
) -> Dict[str, str]:
    """Values for every known placeholder token."""
    return {
        "NOME": employee.name or "",
        "CPF": employee.cpf or "",
        "RG": employee.rg or "",
        "DATA_ADMISSAO": format_date(employee.admission_date),
        "CARGO": employee.position or "",
        "SALARIO": format_currency(employee.salary),
        "ENDERECO": employee.address.format() if employee.address else "",
        "DATA_ATUAL": format_date(today),
        "EMPRESA": company_name,
    }


def render_template(
    content: str,
    employee: Employee,
    today: Optional[date] = None,
    company_name: str = DEFAULT_COMPANY_NAME
) -> str:
    """
    Substitute employee fields into a template.

    Args:
        content: Template text with {TOKEN} placeholders
        employee: Employee whose data fills the template
        today: Date used for {DATA_ATUAL}; defaults to the current date
        company_name: Value for {EMPRESA}

    Returns:
        Rendered text; unresolved placeholders are left verbatim
    """
    values = build_substitutions(employee, today or date.today(), company_name)

    def replace(match: re.Match) -> str:
        return values.get(match.group(1), match.group(0))

    return PLACEHOLDER_PATTERN.sub(replace, content)


def list_placeholders(content: str) -> List[str]:
    """Distinct placeholder tokens used by a template, in order of appearance."""
    tokens: List[str] = []
    for token in PLACEHOLDER_PATTERN.findall(content):
        if token not in tokens:
            tokens.append(token)
    return tokens


def unresolved_placeholders(content: str) -> List[str]:
    """Placeholder tokens the renderer does not know about."""
    return [token for token in list_placeholders(content) if token not in DOCUMENT_VARIABLES]


def validate_occupational_document(document: OccupationalDocument) -> ValidationResult:
    """
    Validate a company programme document.

    Args:
        document: Document to validate

    Returns:
        ValidationResult with validation status and errors
    """
    errors = []
    if document.valid_until < document.issued_on:
        errors.append("Validity date cannot be earlier than the issue date")
    return ValidationResult.from_errors(errors)
