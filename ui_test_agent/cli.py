import argparse
import asyncio
import logging
import sys
from pathlib import Path

from ui_test_agent.agent import PlaywrightTestingAgent, UITestingAgent
from ui_test_agent.builder.suite_loader import load_suites_from_directory
from ui_test_agent.core.config import AgentConfig, load_config
from ui_test_agent.core.exceptions import UITestError
from ui_test_agent.core.models import Action
from ui_test_agent.report.renderer import ReportRenderer, summarize_results, summarize_run
from ui_test_agent.report.screenshots import render_screenshot_report
from ui_test_agent.runtime.accumulator import ResultAccumulator

logger = logging.getLogger(__name__)


def _config_from_args(args: argparse.Namespace) -> AgentConfig:
    overrides = {
        "base_url": getattr(args, "base_url", None),
        "root_dir": Path(args.root) if getattr(args, "root", None) else None,
        "output_dir": Path(args.output) if getattr(args, "output", None) else None,
        "browser": getattr(args, "browser", None),
        "headless": getattr(args, "headless", None),
        "routes": getattr(args, "route", None),
    }
    if getattr(args, "config", None):
        return load_config(Path(args.config), **overrides)
    return AgentConfig.from_env(**overrides)


def _load_suites(args: argparse.Namespace) -> list[tuple[str, list[Action]]]:
    suites = load_suites_from_directory(Path(args.suites))
    if not suites:
        raise UITestError(f"No suites found in {args.suites}")
    return suites


def cmd_generate(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    agent = UITestingAgent(config)
    agent.initialize()
    for name, actions in _load_suites(args):
        agent.build_test_suite(name, actions, stop_on_error=not args.keep_going)
        if args.a11y:
            agent.generate_accessibility_test(name)
    logger.info(f"Generated {len(agent.spec_files)} spec file(s)")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    agent = UITestingAgent(config)
    agent.initialize()
    for name, actions in _load_suites(args):
        agent.build_test_suite(name, actions, stop_on_error=not args.keep_going)
        if args.a11y:
            agent.generate_accessibility_test(name)

    result = agent.run_tests()
    agent.generate_report(result)
    summary = summarize_run(result)
    logger.info(f"UI test run complete: {ReportRenderer(config.output_dir).summary_line(summary)}")
    return 0 if summary.failed == 0 else 1


async def _drive(config: AgentConfig, suites: list[tuple[str, list[Action]]], a11y: bool) -> ResultAccumulator:
    agent = PlaywrightTestingAgent(config)
    results = ResultAccumulator()
    await agent.initialize()
    try:
        for name, actions in suites:
            logger.info(f"Running suite: {name}")
            await agent.run_actions(actions, results)
            if a11y:
                await agent.run_accessibility_check()
    finally:
        await agent.close(results)
        agent.generate_report(results)
    return results


def cmd_drive(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    results = asyncio.run(_drive(config, _load_suites(args), args.a11y))
    summary = summarize_results(results.results)
    logger.info(f"UI test run complete: {ReportRenderer(config.output_dir).summary_line(summary)}")
    return 0 if summary.failed == 0 else 1


def cmd_routes(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    agent = UITestingAgent(config)
    agent.initialize()
    agent.generate_route_tests(accessibility=not args.no_a11y)
    if not args.run:
        return 0

    result = agent.run_tests()
    agent.generate_report(result)
    agent.generate_screenshot_report()
    return 0 if summarize_run(result).failed == 0 else 1


def cmd_screenshot_report(args: argparse.Namespace) -> int:
    render_screenshot_report(Path(args.screenshots), Path(args.reports), viewport_count=args.viewports)
    return 0


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--base-url", help="Target application URL")
    parser.add_argument("--root", help="Cypress project directory (default ./cypress)")
    parser.add_argument("--output", help="Directory for report.json / report.html")
    parser.add_argument("--browser", help="Browser for the engine (default chrome)")
    parser.add_argument("--headless", action="store_true", default=None, help="Run headless (default: on when CI is set)")
    parser.add_argument("--no-headless", action="store_false", dest="headless")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ui-test-agent", description="Generate, run and report browser E2E tests")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, func, help_text in (
        ("generate", cmd_generate, "Write Cypress spec files from YAML suites"),
        ("run", cmd_run, "Generate specs, run them with Cypress and render the report"),
        ("drive", cmd_drive, "Execute YAML suites directly in Playwright and render the report"),
    ):
        p = sub.add_parser(name, help=help_text)
        _add_common(p)
        p.add_argument("--suites", required=True, help="Directory containing suite YAMLs")
        p.add_argument("--a11y", action="store_true", help="Add an accessibility check per suite")
        if name != "drive":
            p.add_argument("--keep-going", action="store_true", help="Skip invalid actions instead of failing")
        p.set_defaults(func=func)

    p = sub.add_parser("routes", help="Write route/viewport exploration specs")
    _add_common(p)
    p.add_argument("--route", action="append", help="Route to cover (repeatable)")
    p.add_argument("--no-a11y", action="store_true", help="Skip the cypress-axe check")
    p.add_argument("--run", action="store_true", help="Run the specs and render reports")
    p.set_defaults(func=cmd_routes)

    p = sub.add_parser("screenshot-report", help="Render ui-test-report.html from screenshots")
    p.add_argument("--screenshots", default="./cypress/screenshots")
    p.add_argument("--reports", default="./cypress/reports")
    p.add_argument("--viewports", type=int, default=3, help="Number of viewports tested")
    p.set_defaults(func=cmd_screenshot_report)

    return parser


def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    try:
        code = args.func(args)
    except UITestError as e:
        logger.error(f"❌ {e}")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
