import json
from typing import Any

import yaml

# ----------------------------
# Output formatting
# ----------------------------


def format_document(doc: dict[str, Any], fmt: str = "json") -> str:
    if fmt == "yaml":
        return yaml.safe_dump(doc, sort_keys=False)
    if fmt == "json":
        return json.dumps(doc, indent=2)
    raise ValueError(f"Unsupported output format '{fmt}'")


def output_result(doc: dict[str, Any], fmt: str = "json") -> None:
    print(format_document(doc, fmt))
