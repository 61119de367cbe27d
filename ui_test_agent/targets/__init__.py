"""Target engine dialects."""

from ui_test_agent.targets.base import ScriptTarget, Target, TargetCapability, split_pair
from ui_test_agent.targets.cypress import CypressTarget
from ui_test_agent.targets.playwright import PlaywrightTarget

TARGETS: dict[str, type[Target]] = {
    CypressTarget.name: CypressTarget,
    PlaywrightTarget.name: PlaywrightTarget,
}


def get_target(name: str) -> Target:
    """Instantiate a registered target by name."""
    try:
        return TARGETS[name]()
    except KeyError:
        raise ValueError(f"Unknown target '{name}'. Available: {', '.join(sorted(TARGETS))}") from None


__all__ = [
    "Target",
    "ScriptTarget",
    "TargetCapability",
    "CypressTarget",
    "PlaywrightTarget",
    "TARGETS",
    "get_target",
    "split_pair",
]
