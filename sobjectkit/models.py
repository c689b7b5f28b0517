"""Typed views of the SObject describe and metadata documents."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from dataclasses import fields as _dataclass_fields
from typing import Any, Callable, Optional


def _decode_str(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"expected a JSON string, got {type(value).__name__}")
    return value


def _decode_bool(value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"expected a JSON boolean, got {type(value).__name__}")
    return value


def _decode_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected a JSON integer, got {type(value).__name__}")
    return value


def _decode_list(item: Optional[Callable[[Any], Any]]) -> Callable[[Any], list]:
    """Decoder for a JSON array; without an item decoder the elements are kept as they are."""

    def decode(value: Any) -> list:
        if value is None:
            return []
        if not isinstance(value, list):
            raise TypeError(f"expected a JSON array, got {type(value).__name__}")
        if item is None:
            return list(value)
        return [item(element) for element in value]

    return decode


def _string(key: str) -> Any:
    return field(default="", metadata={"key": key, "decode": _decode_str})


def _boolean(key: str) -> Any:
    return field(default=False, metadata={"key": key, "decode": _decode_bool})


def _integer(key: str) -> Any:
    return field(default=0, metadata={"key": key, "decode": _decode_int})


def _raw(key: str) -> Any:
    return field(default=None, metadata={"key": key, "decode": None})


def _strings(key: str) -> Any:
    return field(default_factory=list, metadata={"key": key, "decode": _decode_list(_decode_str)})


def _raw_list(key: str) -> Any:
    return field(default_factory=list, metadata={"key": key, "decode": _decode_list(None)})


def _nested(key: str, model: Any) -> Any:
    return field(default_factory=model, metadata={"key": key, "decode": model.from_json})


def _nested_list(key: str, model: Any) -> Any:
    return field(
        default_factory=list,
        metadata={"key": key, "decode": _decode_list(model.from_json)},
    )


def _lookup(data: Mapping[str, Any], key: str) -> tuple[bool, Any]:
    if key in data:
        return True, data[key]
    folded = key.casefold()
    for name, value in data.items():
        if isinstance(name, str) and name.casefold() == folded:
            return True, value
    return False, None


def _decode_model(cls: Any, data: Mapping[str, Any] | None) -> Any:
    """Build a dataclass instance from a decoded JSON object; null gives the defaults."""
    if data is None:
        return cls()
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a JSON object for {cls.__name__}, got {type(data).__name__}")
    values = {}
    for spec in _dataclass_fields(cls):
        found, raw = _lookup(data, spec.metadata["key"])
        if found:
            decode = spec.metadata["decode"]
            values[spec.name] = raw if decode is None else decode(raw)
    return cls(**values)


@dataclass
class ObjectURLs:
    """URLs of the resources belonging to an SObject."""

    compact_layouts: str = _string("compactLayouts")
    row_template: str = _string("rowTemplate")
    approval_layouts: str = _string("approvalLayouts")
    default_values: str = _string("defaultValues")
    list_views: str = _string("listviews")
    describe: str = _string("describe")
    quick_actions: str = _string("quickActions")
    layouts: str = _string("layouts")
    sobject: str = _string("sobject")
    ui_detail_template: str = _string("uiDetailTemplate")
    ui_edit_template: str = _string("uiEditTemplate")
    ui_new_record: str = _string("uiNewRecord")

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> ObjectURLs:
        """Decode from a JSON object."""
        return _decode_model(cls, data)


@dataclass
class ActionOverride:
    """An override of one of the object's standard actions."""

    is_available_in_touch: bool = _boolean("isAvailableInTouch")
    form_factor: str = _string("formFactor")
    name: str = _string("name")
    page_id: str = _string("pageId")
    url: str = _string("url")

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> ActionOverride:
        """Decode from a JSON object."""
        return _decode_model(cls, data)


@dataclass
class ChildRelationship:
    """A child relationship of the SObject."""

    cascade_delete: bool = _boolean("cascadeDelete")
    restricted_delete: bool = _boolean("restrictedDelete")
    deprecated_and_hidden: bool = _boolean("deprecatedAndHidden")
    child_sobject: str = _string("childSObject")
    field: str = _string("field")
    relationship_name: str = _string("relationshipName")
    junction_id_list_names: list[str] = _strings("junctionIdListNames")
    junction_reference_to: list[str] = _strings("junctionReferenceTo")

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> ChildRelationship:
        """Decode from a JSON object."""
        return _decode_model(cls, data)


@dataclass
class PickListValue:
    """One value of a picklist field."""

    active: bool = _boolean("active")
    default_value: bool = _boolean("defaultValue")
    label: str = _string("label")
    valid_for: str = _string("validFor")
    value: str = _string("value")

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> PickListValue:
        """Decode from a JSON object."""
        return _decode_model(cls, data)


@dataclass
class Field:
    """Description of one field of the SObject."""

    aggregatable: bool = _boolean("aggregatable")
    ai_prediction_field: bool = _boolean("aiPredictionField")
    auto_number: bool = _boolean("autoNumber")
    calculated: bool = _boolean("calculated")
    cascade_delete: bool = _boolean("cascadeDelete")
    case_sensitive: bool = _boolean("caseSensitive")
    createable: bool = _boolean("createable")
    custom: bool = _boolean("custom")
    defaulted_on_create: bool = _boolean("defaultedOnCreate")
    dependent_picklist: bool = _boolean("dependentPicklist")
    deprecated_and_hidden: bool = _boolean("deprecatedAndHidden")
    display_location_in_decimal: bool = _boolean("displayLocationInDecimal")
    encrypted: bool = _boolean("encrypted")
    external_id: bool = _boolean("externalId")
    filterable: bool = _boolean("filterable")
    formula_treat_null_number_as_zero: bool = _boolean("formulaTreatNullNumberAsZero")
    groupable: bool = _boolean("groupable")
    high_scale_number: bool = _boolean("highScaleNumber")
    html_formatted: bool = _boolean("htmlFormatted")
    id_lookup: bool = _boolean("idLookup")
    name_field: bool = _boolean("nameField")
    name_pointing: bool = _boolean("namePointing")
    nillable: bool = _boolean("nillable")
    permissionable: bool = _boolean("permissionable")
    polymorphic_foreign_key: bool = _boolean("polymorphicForeignKey")
    query_by_distance: bool = _boolean("queryByDistance")
    restricted_delete: bool = _boolean("restrictedDelete")
    restricted_picklist: bool = _boolean("restrictedPicklist")
    search_prefilterable: bool = _boolean("searchPrefilterable")
    sortable: bool = _boolean("sortable")
    unique: bool = _boolean("unique")
    updateable: bool = _boolean("updateable")
    write_requires_master_read: bool = _boolean("writeRequiresMasterRead")
    digits: int = _integer("digits")
    length: int = _integer("length")
    precision: int = _integer("precision")
    byte_length: int = _integer("byteLength")
    scale: int = _integer("scale")
    inline_help_text: str = _string("inlineHelpText")
    label: str = _string("label")
    name: str = _string("name")
    relationship_name: str = _string("relationshipName")
    type: str = _string("type")
    soap_type: str = _string("soapType")
    compound_field_name: str = _string("compoundFieldName")
    controller_name: str = _string("controllerName")
    reference_target_field: str = _string("referenceTargetField")
    reference_to: list[str] = _strings("referenceTo")
    calculated_formula: Any = _raw("calculatedFormula")
    default_value: Any = _raw("defaultValue")
    default_value_formula: Any = _raw("defaultValueFormula")
    extra_type_info: Any = _raw("extraTypeInfo")
    filtered_lookup_info: Any = _raw("filteredLookupInfo")
    mask: Any = _raw("mask")
    mask_type: Any = _raw("maskType")
    relationship_order: Any = _raw("relationshipOrder")
    picklist_values: list[PickListValue] = _nested_list("picklistValues", PickListValue)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> Field:
        """Decode from a JSON object."""
        return _decode_model(cls, data)


@dataclass
class RecordTypeURL:
    """URLs belonging to a record type."""

    layout: str = _string("layout")

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> RecordTypeURL:
        """Decode from a JSON object."""
        return _decode_model(cls, data)


@dataclass
class RecordTypeInfo:
    """A record type associated with the SObject."""

    active: bool = _boolean("active")
    available: bool = _boolean("available")
    default_record_type_mapping: bool = _boolean("defaultRecordTypeMapping")
    master: bool = _boolean("master")
    name: str = _string("name")
    record_type_id: str = _string("recordTypeId")
    developer_name: str = _string("developerName")
    urls: RecordTypeURL = _nested("urls", RecordTypeURL)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> RecordTypeInfo:
        """Decode from a JSON object."""
        return _decode_model(cls, data)


@dataclass
class SupportedScope:
    """A search scope supported by the SObject."""

    label: str = _string("label")
    name: str = _string("name")

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> SupportedScope:
        """Decode from a JSON object."""
        return _decode_model(cls, data)


@dataclass
class DescribeValue:
    """The full describe document of an SObject."""

    activateable: bool = _boolean("activateable")
    associate_entity_type: str = _string("associateEntityType")
    associate_parent_entity: str = _string("associateParentEntity")
    compact_layoutable: bool = _boolean("compactLayoutable")
    createable: bool = _boolean("createable")
    custom: bool = _boolean("custom")
    custom_setting: bool = _boolean("customSetting")
    deletable: bool = _boolean("deletable")
    deprecated_and_hidden: bool = _boolean("deprecatedAndHidden")
    feed_enabled: bool = _boolean("feedEnabled")
    has_subtypes: bool = _boolean("hasSubtypes")
    is_subtype: bool = _boolean("isSubtype")
    layoutable: bool = _boolean("layoutable")
    mergeable: bool = _boolean("mergeable")
    mru_enabled: bool = _boolean("mruEnabled")
    queryable: bool = _boolean("queryable")
    replicateable: bool = _boolean("replicateable")
    retrieveable: bool = _boolean("retrieveable")
    search_layoutable: bool = _boolean("searchLayoutable")
    searchable: bool = _boolean("searchable")
    triggerable: bool = _boolean("triggerable")
    undeletable: bool = _boolean("undeletable")
    updateable: bool = _boolean("updateable")
    key_prefix: str = _string("keyPrefix")
    label: str = _string("label")
    label_plural: str = _string("labelPlural")
    name: str = _string("name")
    network_scope_field_name: str = _string("networkScopeFieldName")
    listviewable: Any = _raw("listviewable")
    lookup_layoutable: Any = _raw("lookupLayoutable")
    urls: ObjectURLs = _nested("urls", ObjectURLs)
    action_overrides: list[ActionOverride] = _nested_list("actionOverrides", ActionOverride)
    child_relationships: list[ChildRelationship] = _nested_list(
        "childRelationships", ChildRelationship
    )
    fields: list[Field] = _nested_list("fields", Field)
    record_type_infos: list[RecordTypeInfo] = _nested_list("recordTypeInfos", RecordTypeInfo)
    supported_scopes: list[SupportedScope] = _nested_list("supportedScopes", SupportedScope)
    named_layout_infos: list[Any] = _raw_list("namedLayoutInfos")

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> DescribeValue:
        """Decode from a JSON object."""
        return _decode_model(cls, data)


@dataclass
class ObjectDescribe:
    """The summary describe carried in the SObject metadata response."""

    activateable: bool = _boolean("activateable")
    createable: bool = _boolean("createable")
    custom: bool = _boolean("custom")
    custom_setting: bool = _boolean("customSetting")
    deletable: bool = _boolean("deletable")
    deprecated_and_hidden: bool = _boolean("deprecatedAndHidden")
    feed_enabled: bool = _boolean("feedEnabled")
    has_subtypes: bool = _boolean("hasSubtypes")
    is_subtype: bool = _boolean("isSubtype")
    key_prefix: str = _string("keyPrefix")
    label: str = _string("label")
    label_plural: str = _string("labelPlural")
    layoutable: bool = _boolean("layoutable")
    mergeable: bool = _boolean("mergeable")
    mru_enabled: bool = _boolean("mruEnabled")
    name: str = _string("name")
    queryable: bool = _boolean("queryable")
    replicateable: bool = _boolean("replicateable")
    retrieveable: bool = _boolean("retrieveable")
    searchable: bool = _boolean("searchable")
    triggerable: bool = _boolean("triggerable")
    undeletable: bool = _boolean("undeletable")
    updateable: bool = _boolean("updateable")
    urls: ObjectURLs = _nested("urls", ObjectURLs)

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> ObjectDescribe:
        """Decode from a JSON object."""
        return _decode_model(cls, data)


@dataclass
class MetadataValue:
    """The response of the SObject metadata call."""

    object_describe: ObjectDescribe = _nested("objectDescribe", ObjectDescribe)
    recent_items: list[Any] = _raw_list("recentItems")

    @classmethod
    def from_json(cls, data: Mapping[str, Any] | None) -> MetadataValue:
        """Decode from a JSON object."""
        return _decode_model(cls, data)