"""Station prompt: turns the text of one ECJ document into a station list.

The model is asked for a bare JSON array. Station codes and parish IDs are
spelled out from the canonical parish table so the model never invents its
own scheme.
"""

from station_extractor.core.parishes import PARISHES, Parish

STATION_PROMPT_TEMPLATE = """You are analyzing the 2024 Jamaica Electoral Commission (ECJ) Local Government Elections document "{document_name}".
Extract EVERY SINGLE polling station mentioned in this document. Be extremely thorough.

For each polling station, extract:
- name: Station name (school, church, community centre, etc.)
- address: Full address or location description
- parish: Parish name, exactly as written in the table below
- parishId: Parish ID from the table below
- constituency: Constituency, if mentioned
- division: Electoral division, if mentioned

Generate station codes using the parish prefix and a 3-digit sequence:
{prefix_table}

Parish ID mapping:
{id_table}

Return ONLY a JSON array of stations:
[
  {{
    "stationCode": "{example_code}",
    "name": "Alpha Primary School",
    "address": "Alpha Road, {example_parish}",
    "parish": "{example_parish}",
    "parishId": {example_id},
    "constituency": "{example_constituency}",
    "division": "Central Division"
  }}
]

IMPORTANT: Extract EVERY polling station. Be comprehensive. Include all schools, churches and community centres mentioned.

Document text:
{document_text}
"""


def format_prefix_table(parishes: tuple[Parish, ...] = PARISHES) -> str:
    """One line per parish: ``- Kingston: KIN001, KIN002, etc.``"""
    return "\n".join(
        f"- {p.name}: {p.station_code(1)}, {p.station_code(2)}, etc."
        for p in parishes
    )


def format_id_table(parishes: tuple[Parish, ...] = PARISHES) -> str:
    """Comma-separated ``Name=ID`` pairs."""
    return ", ".join(f"{p.name}={p.parish_id}" for p in parishes)


def build_station_prompt(
    document_text: str,
    document_name: str = "document",
    parishes: tuple[Parish, ...] = PARISHES,
) -> str:
    """Build the station extraction prompt for one document.

    Args:
        document_text: Plain text extracted from the document.
        document_name: Logical source name, quoted in the instructions.
        parishes: Parish table to embed (prefixes and IDs).

    Returns:
        Complete user prompt.
    """
    example = parishes[0]
    return STATION_PROMPT_TEMPLATE.format(
        document_name=document_name,
        prefix_table=format_prefix_table(parishes),
        id_table=format_id_table(parishes),
        example_code=example.station_code(1),
        example_parish=example.name,
        example_id=example.parish_id,
        example_constituency=example.constituencies[0] if example.constituencies else example.name,
        document_text=document_text,
    )
