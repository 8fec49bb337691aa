from __future__ import annotations

from typing import Callable, Dict, List, Optional

from loguru import logger

from personabot.personas import authwise, callghost, carebot, emotisense, neochat, taskmaster
from personabot.personas.base import Persona

PersonaFactory = Callable[[], Persona]

BUILTIN_FACTORIES: Dict[str, PersonaFactory] = {
    authwise.NAME: authwise.build,
    callghost.NAME: callghost.build,
    carebot.NAME: carebot.build,
    emotisense.NAME: emotisense.build,
    neochat.NAME: neochat.build,
    taskmaster.NAME: taskmaster.build,
}


class PersonaRegistry:
    """
    In-process registry of persona strategies.

    Personas are built lazily from their factory and cached; unknown names
    resolve to the default persona.
    """

    def __init__(self, default: str = neochat.NAME) -> None:
        self._factories: Dict[str, PersonaFactory] = {}
        self._built: Dict[str, Persona] = {}
        self.default = default

    @classmethod
    def with_builtins(cls, default: str = neochat.NAME) -> "PersonaRegistry":
        registry = cls(default=default)
        for name, factory in BUILTIN_FACTORIES.items():
            registry.register(name, factory)
        return registry

    def register(self, name: str, factory: PersonaFactory) -> None:
        self._factories[name] = factory
        self._built.pop(name, None)

    def names(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def get(self, name: Optional[str]) -> Persona:
        key = (name or "").strip().lower()
        if key not in self._factories:
            if key:
                logger.info(f"unknown persona '{name}', using '{self.default}'")
            key = self.default
        if key not in self._factories:
            raise KeyError(f"Default persona not registered: {self.default}")
        if key not in self._built:
            self._built[key] = self._factories[key]()
        return self._built[key]

    def all(self) -> Dict[str, Persona]:
        return {name: self.get(name) for name in self.names()}
