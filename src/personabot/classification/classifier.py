"""
Generalized ordered keyword-waterfall classifier.

A domain instantiation is a primary `Waterfall` plus independently evaluated
secondary waterfalls (priority/urgency/risk and scope attributes). Rules are
tried in declaration order; the first predicate that matches wins and the
default label fires when none does.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from loguru import logger

from personabot.core.errors import ClassificationFailure
from personabot.domain.classification import ClassificationResult

Predicate = Callable[[str], bool]


def contains_any(*needles: str) -> Predicate:
    """Substring containment over the lowercased text."""
    lowered = tuple(n.lower() for n in needles if n)

    def _pred(text: str) -> bool:
        return any(n in text for n in lowered)

    return _pred


def matches(pattern: str) -> Predicate:
    rx = re.compile(pattern)

    def _pred(text: str) -> bool:
        return rx.search(text) is not None

    return _pred


def has_word(*words: str) -> Predicate:
    """Whole-word containment; multi-word entries are matched as phrases."""
    alternatives = "|".join(re.escape(w.lower()) for w in words if w)
    return matches(rf"\b(?:{alternatives})\b")


@dataclass(frozen=True)
class Rule:
    label: str
    predicate: Predicate


def rule(label: str, *needles: str) -> Rule:
    return Rule(label=label, predicate=contains_any(*needles))


def word_rule(label: str, *words: str) -> Rule:
    return Rule(label=label, predicate=has_word(*words))


@dataclass(frozen=True)
class Waterfall:
    rules: Tuple[Rule, ...]
    default: str
    name: str = "category"

    def __post_init__(self) -> None:
        if not self.default or not str(self.default).strip():
            raise ClassificationFailure(
                message=f"waterfall '{self.name}' declares no default label",
                context={"labels": [r.label for r in self.rules]},
            )
        object.__setattr__(self, "rules", tuple(self.rules))

    @property
    def labels(self) -> FrozenSet[str]:
        return frozenset([r.label for r in self.rules] + [self.default])

    def evaluate(self, text: str) -> str:
        for r in self.rules:
            try:
                if r.predicate(text):
                    return r.label
            except Exception as exc:  # noqa: BLE001
                logger.warning(f"predicate for '{r.label}' in '{self.name}' raised, treated as no match: {exc}")
        return self.default


def waterfall(name: str, rules: Iterable[Rule], default: str) -> Waterfall:
    return Waterfall(rules=tuple(rules), default=default, name=name)


@dataclass(frozen=True)
class CategoryClassifier:
    domain: str
    primary: Waterfall
    level_name: str
    level: Waterfall
    attributes: Mapping[str, Waterfall] = field(default_factory=dict)

    @property
    def categories(self) -> FrozenSet[str]:
        return self.primary.labels

    @property
    def default_category(self) -> str:
        return self.primary.default

    def classify(self, text: Any) -> ClassificationResult:
        lowered = text.lower() if isinstance(text, str) else ""
        attrs: Dict[str, str] = {
            name: wf.evaluate(lowered) for name, wf in self.attributes.items()
        }
        return ClassificationResult(
            domain=self.domain,
            primary_category=self.primary.evaluate(lowered),
            level_name=self.level_name,
            level=self.level.evaluate(lowered),
            attributes=attrs,
        )

    def default_result(self) -> ClassificationResult:
        """Result used when the turn falls back before classification ran."""
        return ClassificationResult(
            domain=self.domain,
            primary_category=self.primary.default,
            level_name=self.level_name,
            level=self.level.default,
            attributes={name: wf.default for name, wf in self.attributes.items()},
        )


def build_classifier(
    domain: str,
    *,
    categories: Iterable[Rule],
    default: str,
    level_name: str,
    levels: Iterable[Rule],
    default_level: str,
    attributes: Optional[Mapping[str, Tuple[Iterable[Rule], str]]] = None,
) -> CategoryClassifier:
    return CategoryClassifier(
        domain=domain,
        primary=waterfall(f"{domain}.category", categories, default),
        level_name=level_name,
        level=waterfall(f"{domain}.{level_name}", levels, default_level),
        attributes={
            name: waterfall(f"{domain}.{name}", rules, fallback)
            for name, (rules, fallback) in (attributes or {}).items()
        },
    )
