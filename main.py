import argparse
import logging
import os
import sys
from typing import Dict, List, Optional

from src.analysis import GraphExpander, betweenness, k_core, top_betweenness
from src.constants import (
    DEFAULT_DATA_PATH,
    DEFAULT_K,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TOP_N,
    METRICS_FILENAME,
)
from src.models import Graph, HIndexResult
from src.networks import build_global_graph
from src.preprocessing import load_articles, normalize_id
from src.reporting import assign_roles, build_metrics_frame, save_metrics


def setup_logging(debug_mode: bool = False) -> None:
    """Configures the logging format and level."""
    level = logging.DEBUG if debug_mode else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Expand and analyze a citation network from an article dataset."
    )
    parser.add_argument(
        "--data",
        type=str,
        default=DEFAULT_DATA_PATH,
        help="Path to the JSON array of article records.",
    )
    parser.add_argument(
        "--seed",
        action="append",
        default=[],
        help="Article id to expand around (repeatable, e.g. W2741809807 or 2741809807).",
    )
    parser.add_argument(
        "--k",
        type=int,
        default=DEFAULT_K,
        help="Minimum degree for the k-core decomposition (>= 1).",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=DEFAULT_TOP_N,
        help="Number of betweenness entries to report.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help="Directory to save the per-node metrics CSV.",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable verbose debug logging."
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main execution pipeline for citation graph analysis.
    Orchestrates loading, global graph construction, H-index expansion,
    betweenness centrality and k-core decomposition.
    """
    args = parse_args(argv)
    setup_logging(args.debug)
    logger = logging.getLogger("Citation-Analysis")

    if args.k < 1:
        logger.error(f"--k must be at least 1, got {args.k}.")
        return 1
    if not args.seed:
        logger.error("At least one --seed is required.")
        return 1

    # 1. Data Loading
    logger.info(f"[Phase 1] Loading articles from {args.data}...")
    try:
        articles = load_articles(args.data)
    except FileNotFoundError:
        logger.error("Data file not found. Please check your path.")
        return 1
    except ValueError as e:
        logger.error(f"Could not parse dataset: {e}")
        return 1

    # 2. Global Graph
    logger.info("[Phase 2] Building Global Graph...")
    global_graph = build_global_graph(articles)
    if not global_graph.nodes:
        logger.error("Dataset produced an empty graph. Exiting.")
        return 1

    # 3. Expansion
    logger.info("[Phase 3] Expanding Working Graph...")
    expander = GraphExpander(global_graph)
    working_graph = Graph()
    seeds = [normalize_id(s) for s in args.seed]
    h_results: Dict[str, HIndexResult] = {}

    for seed in seeds:
        result = expander.expand(working_graph, seed)
        h_results[seed] = result
        logger.info(
            f"  {seed}: H-index={result.h_index}, "
            f"H-median={result.h_median:.1f}, H-core={result.h_core}"
        )

    if not working_graph.nodes:
        logger.error("No seed had a positive H-index; nothing to analyze.")
        return 1

    # 4. Betweenness
    logger.info("[Phase 4] Running Betweenness Centrality...")
    scores = betweenness(working_graph)
    top_betweenness(scores, args.top)

    # 5. K-Core
    logger.info(f"[Phase 5] Running {args.k}-Core Decomposition...")
    core = k_core(working_graph.to_undirected_citation_graph(), args.k)
    logger.info(f"  {args.k}-core members: {sorted(core)}")

    # 6. Report
    roles = assign_roles(working_graph, seeds, h_results, core)
    df = build_metrics_frame(working_graph, global_graph, scores, roles)
    save_metrics(df, os.path.join(args.output, METRICS_FILENAME))

    logger.info(f"Done! All results saved to: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
