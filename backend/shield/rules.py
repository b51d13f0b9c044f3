from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RuleSet:
    """A named bundle of required-field and PII-field policies."""

    name: str
    required: tuple[str, ...]
    pii: tuple[str, ...]


@dataclass
class ComplianceResult:
    """Outcome of checking a payload against a rule set."""

    compliant: bool
    missing: list[str] = field(default_factory=list)


class UnknownRuleSetError(ValueError):
    """Raised when a compliance type is not a registered rule set."""


# ---------------------------------------------------------------------------
# Registered rule sets
# ---------------------------------------------------------------------------

RULE_SETS: Mapping[str, RuleSet] = MappingProxyType(
    {
        "gdpr": RuleSet(
            name="gdpr",
            required=("consent", "purpose", "retention"),
            pii=("email", "phone", "location"),
        ),
        "ccpa": RuleSet(
            name="ccpa",
            required=("notice", "optout", "deletion"),
            pii=("id", "ip", "device"),
        ),
    }
)


def get_rule_set(compliance_type: str) -> RuleSet:
    """Look up a registered rule set, raising ``UnknownRuleSetError``."""
    rule_set = RULE_SETS.get(compliance_type) if isinstance(compliance_type, str) else None
    if rule_set is None:
        raise UnknownRuleSetError(f"Unknown compliance type: {compliance_type!r}")
    return rule_set


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def is_truthy(value: Any) -> bool:
    """JSON-value truthiness: only null, false, "", zero and NaN are false.

    Empty arrays and objects count as present.
    """
    if value is None or isinstance(value, (bool, str)):
        return bool(value)
    if isinstance(value, (int, float)):
        return not (value == 0 or math.isnan(value))
    return True


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"Compliance data must be a mapping, got {type(data).__name__}")
    return data


def missing_required(rule_set: RuleSet, data: Mapping[str, Any]) -> list[str]:
    """Return required fields that are absent or falsy, in declared order."""
    data = _require_mapping(data)
    return [name for name in rule_set.required if not is_truthy(data.get(name))]


def unhandled_pii(rule_set: RuleSet, data: Mapping[str, Any]) -> list[str]:
    """Return PII fields present in *data* without a truthy ``<field>_handling``."""
    data = _require_mapping(data)
    return [
        name
        for name in rule_set.pii
        if is_truthy(data.get(name)) and not is_truthy(data.get(f"{name}_handling"))
    ]


def check_compliance(compliance_type: str, data: Mapping[str, Any]) -> ComplianceResult:
    """Validate *data* against the rule set named by *compliance_type*.

    Both unmet required fields and unhandled PII fields make the payload
    non-compliant, but ``missing`` only ever lists the required fields.
    """
    rule_set = get_rule_set(compliance_type)
    missing = missing_required(rule_set, data)
    unhandled = unhandled_pii(rule_set, data)

    if missing or unhandled:
        return ComplianceResult(compliant=False, missing=missing)
    return ComplianceResult(compliant=True, missing=[])
