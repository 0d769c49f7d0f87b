from __future__ import annotations

import hashlib
import json
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from osm_catalog.models.library import Category, Document


def canonical_json(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def sha256_hexdigest(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def catalog_to_dict(item: Union[Category, Document]) -> Dict[str, Any]:
    """Serialize a catalog item; every node carries its ``type`` tag and
    children keep their construction order."""
    return item.model_dump(mode="json")


def catalog_to_json(item: Union[Category, Document], *, indent: Optional[int] = None) -> str:
    return json.dumps(catalog_to_dict(item), ensure_ascii=False, indent=indent)


def catalog_fingerprint(item: Union[Category, Document]) -> str:
    """Stable hash of the serialized tree; equal trees give equal fingerprints."""
    return sha256_hexdigest(canonical_json(catalog_to_dict(item)))


def write_catalog_json(item: Union[Category, Document], out_dir: str, filename_prefix: str = "catalog") -> str:
    """Write the serialized catalog to a timestamped JSON file.

    Returns the path to the written file.
    """
    ensure_dir(out_dir)
    dt = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    path = os.path.join(out_dir, f"{filename_prefix}-{dt}.json")
    with open(path, "w", encoding="utf-8") as f:
        f.write(catalog_to_json(item, indent=2))
        f.write("\n")
    return path
