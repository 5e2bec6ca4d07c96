"""Event sequencing: action groups and the curve planner."""

from lightpath.sequencer.action_groups import ActionGroups
from lightpath.sequencer.planner import EnvelopeError, PlanningError, ToolpathPlanner

__all__ = ["ActionGroups", "EnvelopeError", "PlanningError", "ToolpathPlanner"]
