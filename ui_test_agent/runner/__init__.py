"""External engine invocation."""

from ui_test_agent.runner.cypress_engine import CypressEngine, Engine, RunOptions

__all__ = ["CypressEngine", "Engine", "RunOptions"]
