"""Starter definition tree written when no source directory exists yet."""

from __future__ import annotations

from pathlib import Path
from string import Template

import structlog

from .errors import IOFailure
from .identifiers import new_identifier

LOGGER = structlog.get_logger("mockoon_config_builder")

GLOBAL_TEMPLATE = Template('''"""Global configuration for the Mockoon environment."""

from mockoon_config_builder.models import Header, Settings, TLSOptions

config = Settings(
    uuid="${settings_uuid}",
    last_migration=33,
    name="Example API",
    endpoint_prefix="",
    latency=0,
    port=3000,
    hostname="",
    proxy_mode=False,
    proxy_host="",
    proxy_remove_prefix=False,
    proxy_req_headers=[Header(key="", value="")],
    proxy_res_headers=[Header(key="", value="")],
    cors=True,
    headers=[
        Header(key="Content-Type", value="application/json"),
        Header(key="Access-Control-Allow-Origin", value="*"),
        Header(key="Access-Control-Allow-Methods", value="GET,POST,PUT,PATCH,DELETE,HEAD,OPTIONS"),
        Header(key="Access-Control-Allow-Headers", value="*"),
    ],
    tls_options=TLSOptions(
        enabled=False,
        type="CERT",
        pfx_path="",
        cert_path="",
        key_path="",
        ca_path="",
        passphrase="",
    ),
    callbacks=[],
)
''')

FOLDER_TEMPLATE = Template('''"""Configuration for the ${folder_name} folder."""

from mockoon_config_builder.models import Folder

config = Folder(
    uuid="${folder_uuid}",
    name="${folder_name}",
    children=[],
)
''')

ROUTE_TEMPLATE = Template('''"""Configuration for the ${documentation} endpoint."""

from typing import TypedDict

from mockoon_config_builder.models import ResponseSpec, Route


class ${body_class}(TypedDict):
${body_fields}


body: ${body_class} = ${body}

config = Route(
    uuid="${route_uuid}",
    type="http",
    documentation="${documentation}",
    method="${method}",
    endpoint="api/example",
    responses=[
        ResponseSpec(
            uuid="${response_uuid}",
            body=body,
            latency=0,
            status_code=${status_code},
            label="${label}",
            headers=[],
            body_type="INLINE",
            file_path="",
            databucket_id="",
            send_file_as_body=False,
            rules=[],
            rules_operator="OR",
            disable_templating=False,
            fallback_to_404=False,
            is_default=True,
            crud_key="id",
            callbacks=[],
        ),
    ],
    response_mode=None,
    streaming_mode=None,
    streaming_interval=0,
)
''')

DATA_TEMPLATE = Template('''"""Configuration for the Users data bucket."""

from mockoon_config_builder.models import DataBucket

config = DataBucket(
    uuid="${bucket_uuid}",
    id="users",
    name="Users",
    documentation="",
    value="""[
  {{#repeat 10}}
  {
    "id": "{{faker 'string.uuid'}}",
    "name": "{{faker 'person.fullName'}}",
    "email": "{{faker 'internet.email'}}",
    "createdAt": "{{faker 'date.recent'}}"
  }
  {{/repeat}}
]""",
)
''')

EXAMPLE_FEATURE = "example-feature"


def write_example_tree(source_dir: Path) -> list[Path]:
    """Write the starter tree (settings, one feature with GET/POST, one bucket)."""

    feature_dir = source_dir / "features" / EXAMPLE_FEATURE
    files = {
        source_dir / "global.py": GLOBAL_TEMPLATE.substitute(settings_uuid=new_identifier()),
        feature_dir / "folder.py": FOLDER_TEMPLATE.substitute(
            folder_uuid=new_identifier(),
            folder_name="Example Feature",
        ),
        feature_dir / "get.py": ROUTE_TEMPLATE.substitute(
            route_uuid=new_identifier(),
            response_uuid=new_identifier(),
            documentation="Get Example Data",
            method="get",
            status_code=200,
            label="Success",
            body_class="ExampleResponse",
            body_fields="    message: str",
            body='{"message": "This is an example response"}',
        ),
        feature_dir / "post.py": ROUTE_TEMPLATE.substitute(
            route_uuid=new_identifier(),
            response_uuid=new_identifier(),
            documentation="Create Example Data",
            method="post",
            status_code=201,
            label="Created",
            body_class="CreateResponse",
            body_fields="    id: str\n    success: bool",
            body='{"id": "{{faker \'string.uuid\'}}", "success": True}',
        ),
        source_dir / "data" / "users.py": DATA_TEMPLATE.substitute(bucket_uuid=new_identifier()),
    }

    for path, content in files.items():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise IOFailure("write example file", path, str(exc)) from exc

    LOGGER.info("example_tree_written", source_dir=str(source_dir), files=len(files))
    return list(files)
