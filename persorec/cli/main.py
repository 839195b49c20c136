import argparse
import sys
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from ..errors import ConfigurationError, CorpusError

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="persorec",
        description="Personality recognizer - LIWC and MRC features from text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (default: persorec.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    _add_analyze_subparser(subparsers)
    _add_corpus_subparser(subparsers)

    return parser


def _add_model_arguments(parser):
    parser.add_argument(
        "-m",
        "--model",
        type=int,
        default=None,
        help="Model to use for computing scores (default 4): 1 = Linear Regression, "
        "2 = M5' Model Tree, 3 = M5' Regression Tree, 4 = Support Vector Machine",
    )
    parser.add_argument(
        "-t",
        "--type",
        choices=["obs", "self"],
        default=None,
        help="obs = observed personality from spoken language, "
        "self = self-assessed personality from written language (default: obs)",
    )
    parser.add_argument(
        "-o", "--outputmod", action="store_true", help="Also outputs models"
    )


def _add_analyze_subparser(subparsers):
    """Add the analyze subcommand (single text)."""
    analyze_parser = subparsers.add_parser(
        "analyze", help="Compute features and scores for one text file"
    )
    analyze_parser.add_argument(
        "-i", "--input", type=Path, required=True, help="Input text file"
    )
    analyze_parser.add_argument(
        "-c", "--counts", action="store_true", help="Also outputs feature counts"
    )
    _add_model_arguments(analyze_parser)


def _add_corpus_subparser(subparsers):
    """Add the corpus subcommand (directory, standardized features)."""
    corpus_parser = subparsers.add_parser(
        "corpus",
        help="Corpus analysis: features are standardized over all files of a directory",
    )
    corpus_parser.add_argument(
        "-i", "--input", type=Path, required=True, help="Input directory of text files"
    )
    corpus_parser.add_argument(
        "-a",
        "--dataset",
        type=Path,
        default=None,
        help="Write the features and predicted scores of each text to this file",
    )
    corpus_parser.add_argument(
        "--format",
        choices=["csv", "arff"],
        default=None,
        help="Dataset format (default: from the file suffix, else csv)",
    )
    corpus_parser.add_argument(
        "--workers", type=int, default=None, help="Number of parallel workers"
    )
    corpus_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-document extraction deadline in seconds",
    )
    _add_model_arguments(corpus_parser)


def _load_models(cfg, args, standardized: bool):
    from ..models import family_by_index, load_models

    if not cfg.get("models_dir"):
        logger.warning("No models_dir configured, computing features only")
        return [], cfg["model_family"]
    family = family_by_index(args.model) if args.model else cfg["model_family"]
    models = load_models(cfg["models_dir"], family, cfg["model_type"], standardized)
    return models, family


def cmd_analyze(args, cfg, console: Console) -> int:
    """Execute the analyze command."""
    from ..pipeline import Pipeline
    from ..models import score_all
    from .report import print_features, print_scores

    input_path = args.input
    if not input_path.exists():
        console.print(f"Input file {input_path} doesn't exist")
        return 1
    if input_path.is_dir():
        console.print(f"{input_path} is a directory, use the corpus command")
        return 1

    pipeline = Pipeline.from_config(cfg)
    models, family = _load_models(cfg, args, standardized=False)

    doc = pipeline.analyze_file(input_path, relative_only=cfg["relative_only"])
    logger.info(f"Total features computed: {len(doc.features)}")

    if args.counts or not models:
        print_features(console, doc.features)

    if models:
        logger.info("Running models...")
        scores = score_all(models, doc.features)
        print_scores(console, models, scores, family, cfg["model_type"], args.outputmod)
    return 0


def cmd_corpus(args, cfg, console: Console) -> int:
    """Execute the corpus command."""
    from ..pipeline import Pipeline
    from ..export import attribute_columns, write_arff, write_csv
    from .report import print_corpus_scores

    input_path = args.input
    if not input_path.is_dir():
        console.print(f"Input {input_path} isn't a directory")
        return 1

    dataset_path = args.dataset
    if dataset_path is not None and not dataset_path.resolve().parent.exists():
        console.print(f"Can't write dataset file {dataset_path}")
        return 1

    pipeline = Pipeline.from_config(cfg)
    models, family = _load_models(cfg, args, standardized=True)

    logger.info(f"Reading directory {input_path.resolve()}...")
    dataset = pipeline.standardized_corpus(input_path)
    scores = pipeline.score_corpus(dataset, models) if models else {}

    if dataset_path is not None:
        columns = attribute_columns(dataset.schema)
        fmt = args.format or ("arff" if dataset_path.suffix.lower() == ".arff" else "csv")
        if fmt == "arff":
            write_arff(
                dataset_path,
                dataset,
                scores,
                columns=columns,
                relation=f"features_{input_path.resolve()}",
            )
        else:
            write_csv(dataset_path, dataset, scores, columns=columns)
        console.print(f"Dataset: {dataset_path}")

    if models:
        print_corpus_scores(console, models, scores, family, cfg["model_type"], args.outputmod)
    else:
        console.print(f"Standardized features computed for {len(dataset)} files")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    from ..config import load_config

    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    if args.command is None:
        parser.print_help()
        return 0

    overrides = {
        "model_type": args.type,
        "workers": getattr(args, "workers", None),
        "document_timeout": getattr(args, "timeout", None),
    }

    commands = {
        "analyze": cmd_analyze,
        "corpus": cmd_corpus,
    }

    console = Console()
    try:
        cfg = load_config(args.config, overrides)
        return commands[args.command](args, cfg, console)
    except (ConfigurationError, CorpusError, ValueError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
