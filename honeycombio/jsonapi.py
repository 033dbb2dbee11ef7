"""JSON:API document codec for pydantic resource models.

A model declares its resource ``type`` and which of its fields are
relationships; every other field (except ``id``) is an attribute.

Reference: https://jsonapi.org/format/
"""

from __future__ import annotations

import typing
from typing import Any, ClassVar, Dict, List, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from honeycombio.errors import JSONAPIDecodeError

R = TypeVar("R", bound="Resource")

_Index = Dict[Tuple[str, str], Dict[str, Any]]


class Resource(BaseModel):
    """Base for models that travel as JSON:API resource objects."""

    model_config = ConfigDict(populate_by_name=True)

    jsonapi_type: ClassVar[str] = ""
    jsonapi_relationships: ClassVar[Tuple[str, ...]] = ()

    id: str = ""


def _relationship_class(model_cls: Type[Resource], name: str) -> Type[Resource]:
    annotation = model_cls.model_fields[name].annotation
    for candidate in (annotation, *typing.get_args(annotation)):
        if isinstance(candidate, type) and issubclass(candidate, Resource):
            return candidate
    raise TypeError(f"{model_cls.__name__}.{name} is not a relationship to a Resource")


def _identifier(obj: Any) -> Tuple[str, str]:
    if not isinstance(obj, dict) or not isinstance(obj.get("type"), str):
        raise JSONAPIDecodeError(f"invalid resource object: {obj!r}")
    return obj["type"], str(obj.get("id") or "")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def marshal_payload(model: Resource) -> Dict[str, Any]:
    """Encode ``model`` as a single-resource document without ``included``.

    ``None`` attributes and an empty ``id`` are left out so partial updates
    only carry the fields being changed.
    """
    rels = model.jsonapi_relationships
    data: Dict[str, Any] = {"type": model.jsonapi_type}
    if model.id:
        data["id"] = model.id

    attributes = model.model_dump(
        mode="json",
        by_alias=True,
        exclude_none=True,
        exclude={"id", *rels},
    )
    if attributes:
        data["attributes"] = attributes

    relationships: Dict[str, Any] = {}
    for name in rels:
        related = getattr(model, name)
        if related is None:
            continue
        relationships[name] = {"data": resource_identifier(related)}
    if relationships:
        data["relationships"] = relationships

    return {"data": data}


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _index_included(document: Dict[str, Any]) -> _Index:
    included = document.get("included") or []
    if not isinstance(included, list):
        raise JSONAPIDecodeError("'included' must be a list")
    return {_identifier(obj): obj for obj in included}


def _decode_resource(obj: Any, model_cls: Type[R], included: _Index) -> R:
    rtype, rid = _identifier(obj)
    if model_cls.jsonapi_type and rtype != model_cls.jsonapi_type:
        raise JSONAPIDecodeError(
            f"expected resource of type {model_cls.jsonapi_type!r}, got {rtype!r}"
        )

    attributes = obj.get("attributes") or {}
    if not isinstance(attributes, dict):
        raise JSONAPIDecodeError(f"attributes of {rtype}/{rid} must be an object")
    values: Dict[str, Any] = dict(attributes)
    values["id"] = rid

    relationships = obj.get("relationships") or {}
    for name in model_cls.jsonapi_relationships:
        rel = relationships.get(name)
        data = rel.get("data") if isinstance(rel, dict) else None
        if data is None:
            continue
        rel_cls = _relationship_class(model_cls, name)
        key = _identifier(data)
        if key in included:
            # one level only; included resources don't resolve their own links
            values[name] = _decode_resource(included[key], rel_cls, {})
        else:
            values[name] = rel_cls(id=key[1])

    try:
        return model_cls.model_validate(values)
    except PydanticValidationError as exc:
        raise JSONAPIDecodeError(f"invalid {rtype} resource: {exc}") from exc


def _document(document: Any) -> Dict[str, Any]:
    if not isinstance(document, dict) or "data" not in document:
        raise JSONAPIDecodeError("document has no top-level 'data' member")
    return document


def unmarshal_payload(document: Any, model_cls: Type[R]) -> R:
    """Decode a single-resource document into ``model_cls``."""
    doc = _document(document)
    if not isinstance(doc["data"], dict):
        raise JSONAPIDecodeError("expected a single resource in 'data'")
    return _decode_resource(doc["data"], model_cls, _index_included(doc))


def unmarshal_many_payload(document: Any, model_cls: Type[R]) -> List[R]:
    """Decode a collection document into a list of ``model_cls``."""
    doc = _document(document)
    if not isinstance(doc["data"], list):
        raise JSONAPIDecodeError("expected a list of resources in 'data'")
    included = _index_included(doc)
    return [_decode_resource(obj, model_cls, included) for obj in doc["data"]]


def resource_identifier(model: Resource) -> Dict[str, str]:
    """The ``{type, id}`` pair identifying ``model``."""
    return {"type": model.jsonapi_type, "id": model.id}
