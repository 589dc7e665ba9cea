"""Run the release notes examples.

Provides two transformers:
- per_change.yml (one summary per change file)
- combined.yml   (all change files joined into one release note)
"""

from __future__ import annotations

import argparse
from pathlib import Path

from llmforge import run_transformer_from_yaml
from llmforge.core.logging import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the release notes transformers")
    parser.add_argument(
        "--transformer",
        choices=["per_change", "combined"],
        default="combined",
        help="Transformer to run",
    )
    parser.add_argument("--settings", help="Settings YAML file (default: ~/.llmforge/settings.yaml)")
    args = parser.parse_args()

    configure_logging(level="INFO", transformer_name=args.transformer)
    definition = Path(__file__).parent / "transformers" / f"{args.transformer}.yml"
    run = run_transformer_from_yaml(str(definition), settings_path=args.settings)
    for output in run.outputs:
        print(output)


if __name__ == "__main__":
    main()
