from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class ClassificationResult:
    """
    Outcome of one domain classifier over the raw turn text.

    `level` is the independently derived priority/urgency/risk attribute;
    `level_name` says which of those it is for this domain.
    """

    domain: str
    primary_category: str
    level_name: str = "priority_level"
    level: str = "normal"
    attributes: Mapping[str, str] = field(default_factory=dict)

    def get(self, name: str, default: str = "") -> str:
        if name == self.level_name:
            return self.level
        return self.attributes.get(name, default)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "domain": self.domain,
            "primary_category": self.primary_category,
            self.level_name: self.level,
        }
        out.update(dict(self.attributes))
        return out
