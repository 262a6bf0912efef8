from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Mapping

import jsonschema


@lru_cache(maxsize=1)
def load_schema() -> Mapping[str, Any]:
    with resources.files("errtrail").joinpath("schema.json").open("r", encoding="utf-8") as handle:
        data: Mapping[str, Any] = json.load(handle)
    return data


@lru_cache(maxsize=1)
def trail_validator() -> jsonschema.protocols.Validator:
    """Validator for the trail wire format, checked against its metaschema once."""
    schema: Mapping[str, Any] = load_schema()
    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)
