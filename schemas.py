"""
Request models — one per operation.

Each operation's argument bag is a pydantic model tagged by its ``method``
literal; together they form a discriminated union, so validating
``{"method": name, **arguments}`` both picks the variant and checks it.

Wire names are camelCase (``logoUrl``, ``filterField``); the models use
snake_case attributes with aliases. Validation errors name fields in the
caller's spelling.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from models import ErrorKind, SiteError
from validation import (
    describe_validation_errors,
    require_http_url,
    validate_domain,
    validate_entry_id,
    validate_slug,
)

NonEmptyStr = Annotated[str, Field(min_length=1)]
WebUrl = Annotated[str, AfterValidator(require_http_url)]
EntryId = Annotated[str, AfterValidator(validate_entry_id)]
Slug = Annotated[str, AfterValidator(validate_slug)]
Domain = Annotated[str, AfterValidator(validate_domain)]
GitHubUsername = Annotated[str, Field(pattern=r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})$")]

Pricing = Literal["free", "freemium", "paid"]
Collection = Literal["tools", "terms", "categories"]


class OperationRequest(BaseModel):
    """Base for all request variants."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    @classmethod
    def operation_name(cls) -> str:
        return cls.model_fields["method"].default

    @classmethod
    def input_schema(cls) -> dict[str, Any]:
        """JSON Schema for the arguments, as advertised in tools/list."""
        schema = cls.model_json_schema(by_alias=True)
        schema.get("properties", {}).pop("method", None)
        required = [name for name in schema.get("required", []) if name != "method"]
        if required:
            schema["required"] = required
        else:
            schema.pop("required", None)
        schema.pop("title", None)
        schema.pop("description", None)
        return schema


# ============================================================================
# ENTRIES
# ============================================================================

class CreateEntityRequest(OperationRequest):
    """Add a new AI tool listing to the content backend and publish it."""

    method: Literal["create-entity"] = "create-entity"
    name: NonEmptyStr
    description: NonEmptyStr
    category: NonEmptyStr
    website: WebUrl
    pricing: Pricing
    tags: list[NonEmptyStr] = Field(default_factory=list)
    features: list[NonEmptyStr] = Field(default_factory=list)
    logo_url: WebUrl | None = Field(default=None, alias="logoUrl")
    is_ai_tool: bool = Field(default=True, alias="isAITool")

    def to_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "website": self.website,
            "pricing": self.pricing,
            "tags": self.tags,
            "features": self.features,
            "isAITool": self.is_ai_tool,
        }
        if self.logo_url:
            fields["logoUrl"] = self.logo_url
        return fields


class UpdateEntityRequest(OperationRequest):
    """Update fields of an existing entry and republish it. Unknown field names are ignored."""

    method: Literal["update-entity"] = "update-entity"
    entry_id: EntryId = Field(validation_alias=AliasChoices("id", "entryId", "entry_id"))
    fields: dict[str, Any] = Field(min_length=1)


class DeleteEntityRequest(OperationRequest):
    """Unpublish and delete an entry."""

    method: Literal["delete-entity"] = "delete-entity"
    entry_id: EntryId = Field(validation_alias=AliasChoices("id", "entryId", "entry_id"))


class CreateTermRequest(OperationRequest):
    """Add a new AI glossary term and publish it."""

    method: Literal["create-term"] = "create-term"
    term: NonEmptyStr
    definition: NonEmptyStr
    category: NonEmptyStr
    related_terms: list[NonEmptyStr] | None = Field(default=None, alias="relatedTerms")
    examples: list[NonEmptyStr] | None = None

    def to_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "term": self.term,
            "definition": self.definition,
            "category": self.category,
        }
        if self.related_terms is not None:
            fields["relatedTerms"] = self.related_terms
        if self.examples is not None:
            fields["examples"] = self.examples
        return fields


class CreateCategoryRequest(OperationRequest):
    """Create a category page that filters tools by one field, and publish it."""

    method: Literal["create-category"] = "create-category"
    name: NonEmptyStr
    slug: Slug
    description: NonEmptyStr
    icon: NonEmptyStr
    filter_field: NonEmptyStr = Field(
        validation_alias=AliasChoices("filterField", "filterBy", "filter_field"),
    )
    filter_values: list[NonEmptyStr] = Field(alias="filterValues")

    def to_fields(self) -> dict[str, Any]:
        return {
            "title": self.name,
            "slug": self.slug,
            "description": self.description,
            "icon": self.icon,
            "filterBy": self.filter_field,
            "filterValues": self.filter_values,
        }


class ListEntriesRequest(OperationRequest):
    """List published entries of one collection, optionally full-text searched."""

    method: Literal["list-entries"] = "list-entries"
    content_type: Collection = Field(alias="contentType")
    search: str | None = None
    limit: int = Field(default=100, ge=1, le=1000)


# ============================================================================
# SITE FILES
# ============================================================================

class UpdateSiteMetadataRequest(OperationRequest):
    """Update SEO metadata (domain, default title, description, keywords, OpenGraph image)."""

    method: Literal["update-site-metadata"] = "update-site-metadata"
    domain: Domain | None = None
    title: NonEmptyStr | None = None
    description: NonEmptyStr | None = None
    keywords: list[NonEmptyStr] | None = None
    og_image: WebUrl | None = Field(default=None, alias="ogImage")

    @model_validator(mode="after")
    def _require_one_field(self) -> "UpdateSiteMetadataRequest":
        if not self.metadata():
            raise ValueError(
                "at least one of domain, title, description, keywords, ogImage is required"
            )
        return self

    def metadata(self) -> dict[str, Any]:
        """Given fields only, keyed by wire name."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"method"})


class UpdateConfigRequest(OperationRequest):
    """Merge key/value settings into the site configuration file."""

    method: Literal["update-config"] = "update-config"
    config: dict[str, Any]


class ValidateContentRequest(OperationRequest):
    """Check published content for missing required fields."""

    method: Literal["validate-content"] = "validate-content"
    content_type: Literal["tools", "terms", "categories", "all"] = Field(alias="contentType")


class BackupContentRequest(OperationRequest):
    """Write a timestamped JSON snapshot of all tools, terms and categories."""

    method: Literal["backup-content"] = "backup-content"
    include_assets: bool = Field(default=False, alias="includeAssets")


class SyncExternalProjectsRequest(OperationRequest):
    """Refresh the cached list of the site owner's public GitHub projects."""

    method: Literal["sync-external-projects"] = "sync-external-projects"
    username: GitHubUsername | None = None
    force_refresh: bool = Field(default=False, alias="forceRefresh")


# ============================================================================
# UNION + PARSING
# ============================================================================

AnyRequest = Annotated[
    Union[
        CreateEntityRequest,
        UpdateEntityRequest,
        DeleteEntityRequest,
        CreateTermRequest,
        CreateCategoryRequest,
        ListEntriesRequest,
        UpdateSiteMetadataRequest,
        UpdateConfigRequest,
        ValidateContentRequest,
        BackupContentRequest,
        SyncExternalProjectsRequest,
    ],
    Field(discriminator="method"),
]

_REQUEST_ADAPTER: TypeAdapter[Any] = TypeAdapter(AnyRequest)

REQUEST_MODELS: dict[str, type[OperationRequest]] = {
    model.operation_name(): model
    for model in (
        CreateEntityRequest,
        UpdateEntityRequest,
        DeleteEntityRequest,
        CreateTermRequest,
        CreateCategoryRequest,
        ListEntriesRequest,
        UpdateSiteMetadataRequest,
        UpdateConfigRequest,
        ValidateContentRequest,
        BackupContentRequest,
        SyncExternalProjectsRequest,
    )
}


def parse_request(method: str, arguments: Any = None) -> OperationRequest:
    """
    Validate an argument bag for the named operation.

    Args:
        method: Operation name, e.g. "create-category"
        arguments: JSON object of arguments (None is treated as {})

    Returns:
        The matching request model instance

    Raises:
        SiteError(NOT_FOUND): Unknown operation
        SiteError(INVALID_REQUEST): Arguments fail validation; details["fields"]
            lists the offending field names
    """
    if method not in REQUEST_MODELS:
        raise SiteError(
            ErrorKind.NOT_FOUND,
            f"Unknown operation: {method}. Supported: {sorted(REQUEST_MODELS)}",
        )
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise SiteError(
            ErrorKind.INVALID_REQUEST,
            f"Arguments for {method} must be a JSON object, got {type(arguments).__name__}",
            details={"fields": ["arguments"]},
        )

    try:
        return _REQUEST_ADAPTER.validate_python({**arguments, "method": method})
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = tuple(error["loc"])
            # Tagged unions prefix each location with the tag value
            if loc and loc[0] == method:
                loc = loc[1:]
            errors.append({**error, "loc": loc})
        message, fields = describe_validation_errors(errors)
        raise SiteError(
            ErrorKind.INVALID_REQUEST,
            f"Invalid arguments for {method}: {message}",
            details={"fields": fields},
        ) from e
