# geomodel/config/defaults.py
"""Default configuration values"""

import os
from pathlib import Path

# Project path
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = Path(os.getenv('GEOMODEL_LOGS_DIR', PROJECT_ROOT / 'logs'))

PATHS = {
    'project_root': str(PROJECT_ROOT),
    'logs_dir': str(LOGS_DIR),
}

# Geocell index behaviour
GEOCELLS = {
    'storage_format': 'key',   # 'key' (lossless strings) or 'hex' (legacy integers)
    'cull_results': True,      # Post-filter candidates by exact coordinates
    'strict_queries': False,   # Raise on inverted/antimeridian boxes instead of returning nothing
}

LOGGING = {
    'level': 'INFO',
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'file': None,  # Defaults to <logs_dir>/geomodel.log when file logging is enabled
    'max_file_size': 10 * 1024 * 1024,  # 10MB
    'backup_count': 5,
}
