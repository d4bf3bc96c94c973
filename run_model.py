"""
Load a model defined by a YAML file, print a section and element summary,
and optionally export it and plot the model.
"""

import sys
import argparse
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from pydantic import ValidationError

from nucleus.io import ModelExporter, ModelLoader
from nucleus.logging_config import setup_logging

logger = logging.getLogger("nucleus.run_model")


def main():
    parser = argparse.ArgumentParser(description="Load and summarise a structural model")
    parser.add_argument("model_file", type=str, help="Path to YAML model file")
    parser.add_argument("--plot", action="store_true", help="Save a plan plot of the model")
    parser.add_argument("--export", type=str, default=None,
                        help="Write a YAML summary to this path")
    parser.add_argument("--output-dir", type=str, default="results",
                        help="Directory for plots")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level")
    args = parser.parse_args()

    setup_logging(getattr(logging, args.log_level))

    model_path = Path(args.model_file).resolve()
    if not model_path.exists():
        logger.error("Model file not found: %s", model_path)
        sys.exit(1)

    try:
        model, config = ModelLoader.load(model_path)
    except ValidationError as e:
        logger.error("Invalid model file %s:\n%s", model_path.name, e)
        sys.exit(1)

    summary = ModelExporter.summary(model)

    print(f"\nModel: {model.name}")
    if config.description:
        print(f"  {config.description}")
    print(f"\n{'Family':<16}{'Profile':<24}{'Area':>12}{'Ixx':>14}{'Iyy':>14}")
    for family in summary['families']:
        print(f"{family['name']:<16}{family.get('profile', '-'):<24}"
              f"{family.get('area', 0.0):>12.6g}{family.get('ixx', 0.0):>14.6g}"
              f"{family.get('iyy', 0.0):>14.6g}")
    print(f"\n{'Element':<16}{'Family':<16}{'Length':>10}  Nodes")
    for element in summary['elements']:
        print(f"{element['name']:<16}{str(element['family']):<16}{element['length']:>10.4f}"
              f"  {element['start_node']} -> {element['end_node']}")
    print(f"\n{summary['nodes']} nodes in use")

    if args.export:
        ModelExporter.export_summary(model, args.export)

    if args.plot:
        from visualization import ShapePlotter

        output_dir = Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_file = output_dir / f"{model_path.stem}_model.png"
        plotter = ShapePlotter()
        plotter.plot_model(model, show_labels=True)
        plotter.save(str(output_file))
        plotter.close()

    logger.info("Done.")


if __name__ == "__main__":
    main()
