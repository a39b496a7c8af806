"""
Survey template rendering

Subjects and bodies use {{ variable }} placeholders filled from the
jurisdiction row. Unknown placeholders are left as written and null
values render as an empty string.
"""

import re
from typing import Any, Dict, Mapping

PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")

TEMPLATE_VARIABLES = (
    "jurisdiction_name",
    "county_name",
    "municipality_name",
    "state",
    "fips_code",
    "tax_year",
    "contact_name",
    "contact_email",
    "survey_link",
)


def survey_link(base_url: str, unique_id: str) -> str:
    return f"{base_url.rstrip('/')}/survey/{unique_id}"


def build_template_context(
    row: Mapping[str, Any], unique_id: str, base_url: str
) -> Dict[str, Any]:
    """Template variables for one catalogue row"""
    return {
        "jurisdiction_name": row.get("display_name"),
        "county_name": row.get("county_name"),
        "municipality_name": row.get("municipality_name"),
        "state": row.get("state"),
        "fips_code": row.get("fips_code"),
        "tax_year": row.get("current_tax_year"),
        "contact_name": row.get("primary_contact_name"),
        "contact_email": row.get("primary_contact_email"),
        "survey_link": survey_link(base_url, unique_id),
    }


def render_template(template: str, context: Mapping[str, Any]) -> str:
    def substitute(match):
        name = match.group(1)
        if name not in context:
            return match.group(0)
        value = context[name]
        return "" if value is None else str(value)

    return PLACEHOLDER.sub(substitute, template or "")
