import asyncio
import sys
import json
import argparse

from pydantic import ValidationError

from storefront_e2e.core.config import StorefrontConfig
from storefront_e2e.core.exceptions import ScenarioConfigError, StorefrontE2EError
from storefront_e2e.core.logger_config import setup_logger
from storefront_e2e.main import run_live_scenario
from storefront_e2e.models.scenario import BUILTIN_SCENARIOS, ScenarioConfig

logger = setup_logger(StorefrontConfig.get_log_level())


def load_scenario(args) -> ScenarioConfig:
    """Load the scenario from a JSON file, or pick a built-in one by name"""

    # Priority 1: JSON file
    if args.json_file:
        logger.info(f"Loading scenario from file: {args.json_file}")
        try:
            with open(args.json_file, 'r', encoding='utf-8') as f:
                return ScenarioConfig.model_validate(json.load(f))
        except FileNotFoundError as e:
            raise ScenarioConfigError(f"File not found: {args.json_file}") from e
        except json.JSONDecodeError as e:
            raise ScenarioConfigError(f"Invalid JSON in file: {e}") from e
        except ValidationError as e:
            raise ScenarioConfigError(f"Invalid scenario: {e}") from e

    # Priority 2: built-in scenario
    try:
        return BUILTIN_SCENARIOS[args.scenario]
    except KeyError:
        raise ScenarioConfigError(f"Unknown scenario '{args.scenario}'. Known: {sorted(BUILTIN_SCENARIOS)}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run a storefront e2e scenario against the live site')
    parser.add_argument('--scenario', default='samsung-tv', help=f"Built-in scenario: {', '.join(sorted(BUILTIN_SCENARIOS))}")
    parser.add_argument('--json-file', help='Path to a JSON scenario definition')
    headless = parser.add_mutually_exclusive_group()
    headless.add_argument('--headless', dest='headless', action='store_true', default=None)
    headless.add_argument('--headed', dest='headless', action='store_false')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        scenario = load_scenario(args)
    except ScenarioConfigError as e:
        logger.error(f"❌ {e}")
        return 2

    try:
        result = asyncio.run(run_live_scenario(scenario, headless=args.headless))
    except StorefrontE2EError as e:
        logger.error(f"❌ Scenario '{scenario.name}' failed: {e}")
        return 1

    if not result.success:
        logger.error(f"❌ Scenario '{scenario.name}': no qualifying listing found")
        return 1

    logger.info(f"✅ Scenario '{scenario.name}' passed: {result.verification.listing_name}")
    print(json.dumps(result.model_dump(mode='json'), indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
