"""
Utility functions for arc diagram workflows
"""

import yaml
import logging
import json
from pathlib import Path
from datetime import datetime
import numpy as np

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'default_config.yaml'

REQUIRED_SECTIONS = ['matrix', 'network', 'arcplot', 'output', 'logging']


def load_config(config_path=None):
    """Load configuration from YAML file (bundled defaults when no path)."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)
    return config


def setup_logging(config):
    """
    Attach handlers to the ``arcnet`` logger.

    Handlers from an earlier call are replaced, so building several
    pipelines in one process does not duplicate log lines.
    """
    log_config = config['logging']
    logger = logging.getLogger('arcnet')
    logger.setLevel(getattr(logging, log_config['level']))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler()]
    if log_config['log_to_file']:
        log_file = Path(log_config['log_file'])
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def create_output_directory(base_dir='outputs', run_name=None):
    """Create timestamped output directory."""
    if run_name is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        run_name = f"run_{timestamp}"

    output_dir = Path(base_dir) / run_name

    for subdir in ['figures', 'tables', 'reports']:
        (output_dir / subdir).mkdir(parents=True, exist_ok=True)

    return output_dir


def save_results(data, filename, output_dir, format='json'):
    """Save a summary dict as JSON or an array (e.g. the adjacency matrix) as .npy."""
    output_path = Path(output_dir) / filename

    if format == 'json':
        with open(output_path, 'w') as f:
            json.dump(data, f, indent=2, cls=NumpyEncoder)
    elif format == 'npy':
        np.save(output_path, np.asarray(data))
    else:
        raise ValueError(f"Unsupported format: {format}")

    return output_path


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder for numpy scalars and arrays and for paths."""
    def default(self, obj):
        if isinstance(obj, np.generic):
            return obj.item()
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)


def validate_config(config):
    """Validate configuration parameters."""
    for key in REQUIRED_SECTIONS:
        if key not in config:
            raise ValueError(f"Missing required config key: {key}")

    n_nodes = config['matrix']['n_nodes']
    if n_nodes < 1:
        raise ValueError("matrix.n_nodes must be at least 1")

    edge_prob = config['matrix']['edge_prob']
    if not 0.0 <= edge_prob <= 1.0:
        raise ValueError("matrix.edge_prob must lie in [0, 1]")

    return True


def format_time(seconds):
    """Format seconds into readable time string."""
    minutes, seconds = divmod(seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{seconds:.2f}s"
