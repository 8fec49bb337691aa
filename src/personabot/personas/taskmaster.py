"""TaskMaster: task and productivity planning."""

from __future__ import annotations

from personabot.classification import build_classifier, rule
from personabot.dispatch import RenderRequest, ResponseDispatcher
from personabot.personas.base import Persona, PersonaConfig
from personabot.personas.filters import ToneProfile

NAME = "taskmaster"

CLASSIFIER = build_classifier(
    "task_type",
    categories=[
        rule("task_creation", "create", "add", "new"),
        rule("task_organization", "organize", "plan", "schedule"),
        rule("priority_management", "priority", "urgent", "important"),
        rule("deadline_tracking", "deadline", "due", "timeline"),
        rule("progress_tracking", "progress", "status", "update"),
        rule("workflow_automation", "automate", "workflow", "process"),
        rule("productivity_analysis", "productivity", "efficiency", "optimize"),
    ],
    default="general_task_management",
    level_name="priority_level",
    levels=[
        rule("critical", "urgent", "critical", "asap", "emergency"),
        rule("high", "important", "high"),
        rule("low", "low", "minor"),
    ],
    default_level="medium",
    attributes={
        "complexity": (
            [
                rule("high", "complex", "difficult", "challenging", "multi-step"),
                rule("low", "simple", "easy", "quick"),
            ],
            "medium",
        ),
        "estimated_time": (
            [
                rule("minutes", "minute", "quick"),
                rule("hours", "hour"),
                rule("days", "day"),
                rule("weeks", "week"),
            ],
            "unknown",
        ),
    },
)

_PRIORITY_NOTE = {
    "critical": "Marked critical: do this first.",
    "high": "High priority: schedule it today.",
    "medium": "Medium priority.",
    "low": "Low priority: batch it with similar work.",
}


def _priority(request: RenderRequest) -> str:
    return _PRIORITY_NOTE[request.classification.level]


def task_creation(request: RenderRequest) -> str:
    note = _priority(request)
    if request.classification.get("complexity") == "high":
        return f"Task captured. {note} It looks complex, so let's split it into subtasks."
    return f"Task captured. {note}"


def task_organization(request: RenderRequest) -> str:
    return f"Let's organize: group related tasks, then order them by deadline. {_priority(request)}"


def priority_management(request: RenderRequest) -> str:
    return f"Sort your list into urgent/important quadrants and start with the top-left one. {_priority(request)}"


def deadline_tracking(request: RenderRequest) -> str:
    return "Give me the deadline and I'll work backwards to set checkpoints along the way."


def progress_tracking(request: RenderRequest) -> str:
    return "Tell me what's done and what's blocked, and I'll summarize where the project stands."


def workflow_automation(request: RenderRequest) -> str:
    return "Describe the steps you repeat most often and we'll find which ones can run automatically."


def productivity_analysis(request: RenderRequest) -> str:
    return "Track where your time goes for a few days, then we'll cut the lowest-value work first."


def general_task_management(request: RenderRequest) -> str:
    return "I can create, organize and prioritize your tasks. What are you working on?"


DISPATCHER = ResponseDispatcher(
    {
        "task_creation": task_creation,
        "task_organization": task_organization,
        "priority_management": priority_management,
        "deadline_tracking": deadline_tracking,
        "progress_tracking": progress_tracking,
        "workflow_automation": workflow_automation,
        "productivity_analysis": productivity_analysis,
    },
    default=general_task_management,
    name=NAME,
)

CONFIG = PersonaConfig(
    name=NAME,
    display_name="TaskMaster",
    tagline="Get organized, stay on track",
    emoji="✅",
    tone=ToneProfile(agreeableness=6, neuroticism=3, conscientiousness=9, playfulness=3, extraversion=5),
    base_suggestions=("What's the next task on your list?",),
    suggestions={
        "task_creation": ("Should I break this into subtasks?", "Want to set a deadline?"),
        "deadline_tracking": ("Should I add reminders before the deadline?",),
        "default": ("Want to review your priorities?", "Shall we plan tomorrow?"),
    },
)


def build() -> Persona:
    return Persona(CONFIG, CLASSIFIER, DISPATCHER)
