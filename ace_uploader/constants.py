# Chunking constants
BATCH_SIZE = 10  # static default, adaptive uploads use UPLOAD_STRATEGY_TIERS
MAX_LINES_PER_BLOB = 800

# Directory the tool keeps its own state in, never uploaded
TOOL_STATE_DIR = ".ace-tool"

DEFAULT_TEXT_EXTENSIONS = frozenset(
    [
        # programming languages
        ".py", ".js", ".ts", ".jsx", ".tsx",
        ".java", ".go", ".rs", ".cpp", ".c",
        ".h", ".hpp", ".cs", ".rb", ".php",
        ".swift", ".kt", ".scala", ".clj",
        # config and data
        ".md", ".txt", ".json", ".yaml", ".yml",
        ".toml", ".xml", ".ini", ".conf",
        # web
        ".html", ".css", ".scss", ".sass", ".less",
        # scripts
        ".sql", ".sh", ".bash", ".ps1", ".bat",
        ".vue", ".svelte",
    ]
)  # fmt: skip

DEFAULT_EXCLUDE_PATTERNS = (
    # virtual environments
    ".venv", "venv", ".env", "env", "node_modules",
    # version control
    ".git", ".svn", ".hg",
    # python caches
    "__pycache__", ".pytest_cache", ".mypy_cache",
    ".tox", ".eggs", "*.egg-info",
    # build output
    "dist", "build", "target", "out",
    # IDE settings
    ".idea", ".vscode", ".vs",
    # OS files
    ".DS_Store", "Thumbs.db",
    # compiled files
    "*.pyc", "*.pyo", "*.pyd", "*.so", "*.dll",
    TOOL_STATE_DIR,
)  # fmt: skip

# Adaptive upload tiers: (exclusive upper blob count, batch size, concurrency,
# timeout in milliseconds, scale name). The last tier has no upper bound.
UPLOAD_STRATEGY_TIERS = (
    (100, 10, 1, 30_000, "small"),
    (500, 30, 2, 45_000, "medium"),
    (2000, 50, 3, 60_000, "large"),
    (None, 70, 4, 90_000, "extra-large"),
)

# Maximum number of MCP log notifications waiting for delivery
MCP_LOG_QUEUE_SIZE = 1000
