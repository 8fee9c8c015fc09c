"""CLI entrypoint for the polling-station pipeline."""

import argparse
import asyncio
import json
import logging
import os
import sys
import warnings
from datetime import datetime
from pathlib import Path

# Suppress LiteLLM's direct prints (must be before import)
os.environ["LITELLM_LOG"] = "ERROR"

# Suppress noisy warnings before any imports
warnings.filterwarnings("ignore", message="Pydantic serializer warnings")
warnings.filterwarnings("ignore", category=ResourceWarning)

# Suppress noisy loggers (HTTP clients, LiteLLM internals)
for logger_name in ["httpx", "httpcore", "litellm", "LiteLLM",
                    "LiteLLM Proxy", "LiteLLM Router", "asyncio"]:
    logging.getLogger(logger_name).setLevel(logging.ERROR)

from dotenv import load_dotenv  # noqa: E402 - must be after logging config

# Load environment variables
load_dotenv()

import litellm  # noqa: E402

from station_extractor.core.config import (  # noqa: E402
    API_KEY_ENV_VAR,
    LLM_PROVIDER,
    STATION_MODEL,
    FallbackConfig,
    FetchConfig,
    OutputConfig,
    has_llm_credentials,
)

litellm.suppress_debug_info = True


def write_result(result_dict: dict, output_dir: Path) -> Path:
    """Write the result JSON under ``output_dir/json`` and return its path."""
    json_dir = output_dir / "json"
    json_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_file = json_dir / f"polling_stations_{timestamp}.json"
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(result_dict, f, indent=2, ensure_ascii=False)
    return output_file


async def extract(
    output_dir: str = OutputConfig.OUTPUT_DIR,
    max_concurrent: int = FetchConfig.MAX_CONCURRENT,
    threshold: int = FallbackConfig.THRESHOLD,
    model: str | None = None,
    offline: bool = False,
    verbose: bool = False,
) -> dict | None:
    """Run the extraction pipeline.

    Args:
        output_dir: Directory for output files.
        max_concurrent: Max sources processed at once.
        threshold: Minimum AI record count that skips the fallback.
        model: LLM model override.
        offline: Skip all sources and emit the synthetic dataset only.
        verbose: Verbose output.

    Returns:
        Result dict (camelCase keys), or None on failure.
    """
    # Import here to avoid circular imports
    from station_extractor.core.sources import DEFAULT_SOURCES
    from station_extractor.orchestrator import Orchestrator

    output_dir = Path(output_dir)
    logs_dir = output_dir / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    resolved_model = model or STATION_MODEL

    print(f"\n{'='*50}")
    print("Extracting: ECJ 2024 polling stations")
    print(f"{'='*50}")
    print(f"  Provider: {LLM_PROVIDER}")
    print(f"  Model: {resolved_model.split('/')[-1]}")
    print(f"  Concurrency: {max_concurrent}")
    print(f"  Fallback threshold: {threshold}")
    if offline:
        print("  Offline: synthetic dataset only")
    print()

    if not offline and not has_llm_credentials():
        print(f"Warning: {API_KEY_ENV_VAR} not set, AI extraction will be skipped")
        if LLM_PROVIDER == "azure":
            print("For Azure, set: AZURE_API_KEY, AZURE_API_BASE, AZURE_API_VERSION")
        else:
            print(f"Set it in .env or export {API_KEY_ENV_VAR}=...")

    try:
        orchestrator = Orchestrator(
            sources=() if offline else DEFAULT_SOURCES,
            model=resolved_model,
            fallback_threshold=threshold,
            max_concurrent=max_concurrent,
            verbose=verbose,
            log_dir=logs_dir,
        )

        result = await orchestrator.run()
        result_dict = result.to_dict()

        output_file = write_result(result_dict, output_dir)
        print(f"\n[OUTPUT] {output_file}")
        if orchestrator.logger.log_file:
            print(f"[LOG] {orchestrator.logger.log_file}")

        print(f"\nStations: {result.total_stations}")
        for parish, count in result.stations_by_parish().items():
            print(f"  {parish}: {count}")

        # Print cost summary
        cost_tracker = orchestrator.context.cost_tracker
        if cost_tracker.call_count > 0:
            print(f"\n{cost_tracker.summary()}")

        quality = orchestrator.context.state.quality
        if quality and not quality.is_clean:
            print(f"\nData-quality issues: {quality.issue_count} {quality.by_type()}")

        return result_dict

    except Exception as e:
        print(f"\n[ERROR] Pipeline failed: {e}")
        if verbose:
            import traceback
            traceback.print_exc()
        return None


def main():
    parser = argparse.ArgumentParser(
        description="ECJ Polling-Station Extraction Pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  extract-stations                      # all sources, default model
  extract-stations -o data --threshold 500
  extract-stations --offline            # synthetic dataset only, no network
        """,
    )
    parser.add_argument(
        "-o", "--output",
        default=OutputConfig.OUTPUT_DIR,
        help=f"Output directory (default: {OutputConfig.OUTPUT_DIR})",
    )
    parser.add_argument(
        "-c", "--concurrent",
        type=int,
        default=FetchConfig.MAX_CONCURRENT,
        help=f"Max sources processed at once (default: {FetchConfig.MAX_CONCURRENT})",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=FallbackConfig.THRESHOLD,
        metavar="N",
        help=f"Add synthetic stations when sources yield fewer than N records (default: {FallbackConfig.THRESHOLD})",
    )
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help=f"Model for station extraction. Default: {STATION_MODEL}",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip all sources and write the synthetic dataset only",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output with DEBUG level logging",
    )

    args = parser.parse_args()

    result = asyncio.run(extract(
        output_dir=args.output,
        max_concurrent=args.concurrent,
        threshold=args.threshold,
        model=args.model,
        offline=args.offline,
        verbose=args.verbose,
    ))

    sys.exit(0 if result else 1)


if __name__ == "__main__":
    main()
