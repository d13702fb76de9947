"""
Content validation — find published entries with missing required fields.

One issue per missing field per entry, so the issue count is the number
of gaps to fill. "all" covers tools and terms; category pages are only
checked when asked for by name.
"""

from models import AI_TERM, AI_TOOL, CATEGORY_PAGE, ContentRecord, SiteContext, ToolResult
from schemas import ValidateContentRequest

# content type → (label for messages, [(field, description)])
REQUIRED_FIELDS: dict[str, tuple[str, list[tuple[str, str]]]] = {
    AI_TOOL: ("Tool", [
        ("name", "name"),
        ("description", "description"),
        ("website", "website"),
        ("category", "category"),
    ]),
    AI_TERM: ("Term", [
        ("term", "term name"),
        ("definition", "definition"),
        ("category", "category"),
    ]),
    CATEGORY_PAGE: ("Category", [
        ("title", "title"),
        ("slug", "slug"),
        ("filterBy", "filter field"),
    ]),
}

SCOPES: dict[str, list[str]] = {
    "tools": [AI_TOOL],
    "terms": [AI_TERM],
    "categories": [CATEGORY_PAGE],
    "all": [AI_TOOL, AI_TERM],
}


def find_missing_fields(record: ContentRecord, content_type: str) -> list[str]:
    """Return one issue line per required field that is absent or empty."""
    label, required = REQUIRED_FIELDS[content_type]
    return [
        f"{label} {record.id} missing {description}"
        for name, description in required
        if not record.fields.get(name)
    ]


def do_validate_content(ctx: SiteContext, request: ValidateContentRequest) -> ToolResult:
    issues: list[str] = []
    checked: dict[str, int] = {}

    for content_type in SCOPES[request.content_type]:
        records = ctx.backend.list_entries(content_type, limit=1000)
        checked[content_type] = len(records)
        for record in records:
            issues.extend(find_missing_fields(record, content_type))

    if issues:
        message = f"Found {len(issues)} validation issues:\n" + "\n".join(issues)
    else:
        message = "All content validation passed"

    return ToolResult(
        operation="validate-content",
        message=message,
        cues={"issue_count": len(issues), "issues": issues, "checked": checked},
    )
