DEFAULT_DATA_PATH = "data/articles.json"
DEFAULT_OUTPUT_DIR = "results"

# Seeds typed without the OpenAlex work prefix get it prepended
ID_PREFIX = "W"

UNKNOWN_INITIALS = "?"

DEFAULT_K = 2
DEFAULT_TOP_N = 20

METRICS_FILENAME = "node_metrics.csv"
