"""Pydantic models describing a Mockoon environment and its building blocks."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Method = Literal[
    "all",
    "get",
    "post",
    "put",
    "patch",
    "delete",
    "head",
    "options",
    "propfind",
    "proppatch",
    "move",
    "copy",
    "mkcol",
    "lock",
    "unlock",
    "",
]
RouteType = Literal["http", "crud", "ws"]
ResponseMode = Literal["RANDOM", "SEQUENTIAL", "DISABLE_RULES", "FALLBACK"]
StreamingMode = Literal["UNICAST", "BROADCAST"]
RuleTarget = Literal[
    "body",
    "query",
    "header",
    "cookie",
    "params",
    "path",
    "method",
    "request_number",
    "global_var",
    "data_bucket",
    "templating",
]
RuleOperator = Literal[
    "equals",
    "regex",
    "regex_i",
    "null",
    "empty_array",
    "array_includes",
    "valid_json_schema",
]


class BodyType(str, Enum):
    """Where a response body comes from."""

    INLINE = "INLINE"
    FILE = "FILE"
    DATABUCKET = "DATABUCKET"


class LogicalOperator(str, Enum):
    """How the rules of a response are combined."""

    AND = "AND"
    OR = "OR"


class Record(BaseModel):
    """Base for every record of the environment document.

    Attributes are snake_case, the wire format is camelCase. Unknown keys are
    kept so newer runtime fields pass through untouched.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def as_serializable(self) -> dict[str, Any]:
        """Return the JSON payload with only the fields that were provided."""

        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class Header(Record):
    key: str
    value: str


class CallbackInvocation(Record):
    uuid: Optional[str] = None
    latency: int = 0


class ResponseRule(Record):
    """Condition evaluated by the runtime against an incoming request."""

    target: RuleTarget
    modifier: str = ""
    value: str = ""
    invert: bool = False
    operator: RuleOperator = "equals"


class ResponseSpec(Record):
    """One candidate response of a route."""

    uuid: Optional[str] = None
    rules: list[ResponseRule] = Field(default_factory=list)
    rules_operator: LogicalOperator = LogicalOperator.OR
    status_code: int = 200
    label: str = ""
    headers: list[Header] = Field(default_factory=list)
    body: Any = ""
    latency: int = 0
    body_type: BodyType = BodyType.INLINE
    file_path: str = ""
    databucket_id: str = Field("", alias="databucketID")
    send_file_as_body: bool = False
    disable_templating: bool = False
    fallback_to_404: bool = Field(False, alias="fallbackTo404")
    is_default: bool = Field(False, alias="default")
    crud_key: Optional[str] = None
    callbacks: Optional[list[CallbackInvocation]] = None


class Route(Record):
    """Single endpoint definition, one per feature file."""

    uuid: Optional[str] = None
    type: RouteType = "http"
    documentation: str = ""
    method: Method = "get"
    endpoint: str = ""
    responses: list[ResponseSpec] = Field(default_factory=list)
    response_mode: Optional[ResponseMode] = None
    streaming_mode: Optional[StreamingMode] = None
    streaming_interval: Optional[int] = None


class ChildRef(Record):
    """Reference to a route or folder used in containment lists."""

    type: Literal["route", "folder"]
    uuid: str


class Folder(Record):
    uuid: Optional[str] = None
    name: str = ""
    children: list[ChildRef] = Field(default_factory=list)


class DataBucket(Record):
    """Reusable templated data evaluated by the runtime."""

    uuid: Optional[str] = None
    id: str = ""
    name: str = ""
    documentation: str = ""
    value: str = ""


class TLSOptions(Record):
    enabled: bool = False
    type: Literal["PFX", "CERT"] = "CERT"
    pfx_path: str = ""
    cert_path: str = ""
    key_path: str = ""
    ca_path: str = ""
    passphrase: str = ""


class Callback(Record):
    uuid: Optional[str] = None
    id: str = ""
    name: str = ""
    documentation: str = ""
    method: Method = "get"
    uri: str = ""
    headers: list[Header] = Field(default_factory=list)
    body: Optional[str] = None
    file_path: Optional[str] = None
    send_file_as_body: Optional[bool] = None
    body_type: BodyType = BodyType.INLINE
    databucket_id: Optional[str] = Field(None, alias="databucketID")


class Settings(Record):
    """Environment-wide settings, loaded from the single global definition."""

    uuid: Optional[str] = None
    last_migration: Optional[int] = None
    name: str = ""
    endpoint_prefix: str = ""
    latency: int = Field(0, ge=0)
    port: int = Field(3000, ge=0, le=65535)
    hostname: str = ""
    proxy_mode: bool = False
    proxy_host: Optional[str] = None
    proxy_remove_prefix: Optional[bool] = None
    proxy_req_headers: Optional[list[Header]] = None
    proxy_res_headers: Optional[list[Header]] = None
    cors: bool = True
    headers: list[Header] = Field(default_factory=list)
    tls_options: Optional[TLSOptions] = None
    callbacks: Optional[list[Callback]] = None


class Environment(BaseModel):
    """Top-level document consumed by the Mockoon runtime."""

    model_config = ConfigDict(populate_by_name=True)

    settings: Settings
    folders: list[Folder] = Field(default_factory=list)
    routes: list[Route] = Field(default_factory=list)
    data: list[DataBucket] = Field(default_factory=list)
    root_children: list[ChildRef] = Field(default_factory=list, alias="rootChildren")

    def as_serializable(self) -> dict[str, Any]:
        """Return the JSON payload: settings fields first, then the collections."""

        payload = self.settings.as_serializable()
        payload["folders"] = [folder.as_serializable() for folder in self.folders]
        payload["routes"] = [route.as_serializable() for route in self.routes]
        payload["data"] = [bucket.as_serializable() for bucket in self.data]
        payload["rootChildren"] = [child.as_serializable() for child in self.root_children]
        return payload
