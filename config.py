# config.py
# Default simulation parameters. Fixed for the lifetime of an engine.

# FIRST-FIT #
DEFAULT_BLOCK_CAPACITIES = [200, 300, 100, 500, 50]  # KB, scanned in this order

# QUICK-FIT #
DEFAULT_SIZE_CLASSES = (50, 100, 200, 300, 500)  # KB
DEFAULT_CLASS_POPULATION = 5  # free blocks per class at start and after reset

# PRESENTATION #
FIRST_FIT = "First-Fit"
QUICK_FIT = "Quick-Fit"
MODES = [FIRST_FIT, QUICK_FIT]
EVENT_LOG_TAIL = 20  # most recent events shown in the UI

OCCUPIED_COLOR = "#90EE90"  # light green
FREE_COLOR = "#FF6347"  # tomato
