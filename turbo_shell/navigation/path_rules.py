"""
Path rules and the matcher that turns a URL into a property map.

Rules are applied in list order and later matches override earlier ones on
key collisions. There is no specificity heuristic: whoever authors the
configuration puts the more specific rules last.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator

from ..Constants import (
    ACTION_ADVANCE,
    ACTION_REPLACE,
    ACTION_RESTORE,
    PRESENTATION_MODAL,
)
from ..session.errors import TurboShellError

Scalar = Union[str, int, float, bool, None]
PropertyMap = Dict[str, Scalar]


class PathRuleError(TurboShellError):
    """A rule in a path configuration document is malformed."""
    pass


class VisitAction(str, Enum):
    """How a visit wants the navigation stack to change."""
    ADVANCE = ACTION_ADVANCE
    REPLACE = ACTION_REPLACE
    RESTORE = ACTION_RESTORE

    @classmethod
    def normalize(cls, value: Any) -> "VisitAction":
        """Unspecified or unrecognized actions are treated as advance."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            if value not in (None, ""):
                logger.debug(f"Unrecognized visit action {value!r}, treating as advance")
            return cls.ADVANCE


class VisitProperties(BaseModel):
    """
    The path properties the routing engine understands.

    Unknown keys are ignored. Unrecognized values for known keys are treated as
    unset rather than rejected, since the configuration is authored remotely.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    presentation: Optional[str] = None
    action: Optional[VisitAction] = None

    @field_validator("presentation", mode="before")
    @classmethod
    def _known_presentation(cls, value: Any) -> Optional[str]:
        if value == PRESENTATION_MODAL:
            return value
        if value is not None:
            logger.debug(f"Ignoring unrecognized presentation {value!r}")
        return None

    @field_validator("action", mode="before")
    @classmethod
    def _known_action(cls, value: Any) -> Optional[VisitAction]:
        # advance is the default already, so only the overriding actions count
        if value in (ACTION_REPLACE, ACTION_RESTORE):
            return VisitAction(value)
        if value is not None:
            logger.debug(f"Ignoring unrecognized action property {value!r}")
        return None

    @property
    def is_modal(self) -> bool:
        return self.presentation == PRESENTATION_MODAL

    @classmethod
    def from_map(cls, properties: Optional[Mapping[str, Scalar]]) -> "VisitProperties":
        return cls.model_validate(dict(properties or {}))


@dataclass(frozen=True)
class PathRule:
    """One entry of a path configuration: where it applies and what it sets."""
    patterns: Tuple[re.Pattern, ...]
    properties: Mapping[str, Scalar] = field(default_factory=dict)
    query: Tuple[Tuple[str, re.Pattern], ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "PathRule":
        """
        Build a rule from its JSON form.

        Args:
            data: ``{"patterns": [...], "properties": {...}, "query": {...}}``

        Raises:
            PathRuleError: If the rule is not shaped like a rule or a pattern does not compile
        """
        if not isinstance(data, dict):
            raise PathRuleError(f"Rule must be an object, got {type(data).__name__}")

        raw_patterns = data.get("patterns")
        if isinstance(raw_patterns, str):
            raw_patterns = [raw_patterns]
        if not isinstance(raw_patterns, list) or not raw_patterns:
            raise PathRuleError("Rule needs a non-empty 'patterns' list")

        properties = data.get("properties", {})
        if not isinstance(properties, dict):
            raise PathRuleError("Rule 'properties' must be an object")
        scalar_properties = {}
        for key, value in properties.items():
            if isinstance(value, (str, int, float, bool)) or value is None:
                scalar_properties[str(key)] = value
            else:
                logger.debug(f"Dropping non-scalar property {key!r} from rule {raw_patterns!r}")

        raw_query = data.get("query", {})
        if not isinstance(raw_query, dict):
            raise PathRuleError("Rule 'query' must be an object")

        try:
            patterns = tuple(re.compile(str(pattern)) for pattern in raw_patterns)
            query = tuple((str(name), re.compile(str(pattern))) for name, pattern in raw_query.items())
        except re.error as e:
            raise PathRuleError(f"Invalid pattern in rule {raw_patterns!r}: {e}") from e

        return cls(patterns=patterns, properties=scalar_properties, query=query)

    def matches(self, url: httpx.URL) -> bool:
        if not any(pattern.search(url.path) for pattern in self.patterns):
            return False
        for name, pattern in self.query:
            value = url.params.get(name)
            if value is None or not pattern.search(value):
                return False
        return True


def parse_rules(raw_rules: Any, origin: str = "configuration") -> Tuple[PathRule, ...]:
    """Parse a JSON rule list, skipping malformed rules and keeping the rest in order."""
    if not isinstance(raw_rules, list):
        if raw_rules is not None:
            logger.warning(f"'rules' in {origin} is not a list; ignoring it")
        return ()
    rules = []
    for index, raw_rule in enumerate(raw_rules):
        try:
            rules.append(PathRule.from_dict(raw_rule))
        except PathRuleError as e:
            logger.warning(f"Skipping rule #{index} from {origin}: {e}")
    return tuple(rules)


def resolve(url: Union[httpx.URL, str], rules: Iterable[PathRule]) -> PropertyMap:
    """
    Merge the properties of every rule matching ``url``.

    Args:
        url: URL being visited
        rules: Rules in configuration order

    Returns:
        The merged properties; later matches win. Empty when nothing matches.
    """
    url = httpx.URL(url) if isinstance(url, str) else url
    properties: PropertyMap = {}
    for rule in rules:
        if rule.matches(url):
            properties.update(rule.properties)
    return properties
