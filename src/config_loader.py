"""
Configuration loader for the Hue bridge collector
Loads and validates configuration from YAML files
"""

import yaml
import logging
from typing import Dict, Any
from pathlib import Path
from datetime import datetime
import pytz

logger = logging.getLogger(__name__)

DESCRIPTION = "Gather Hue Bridge status"

def load_config(config_path: str = "config/config.yaml") -> Dict[str, Any]:
    """
    Load configuration from YAML file with validation
    """
    try:
        config_file = Path(config_path)
        if not config_file.exists():
            logger.error(f"Configuration file not found: {config_path}")
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r') as f:
            config = yaml.safe_load(f) or {}

        # Validate required sections
        _validate_config(config)

        # Apply defaults
        config = _apply_defaults(config)

        logger.info(f"Configuration loaded from {config_path}")
        return config

    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise

def _validate_config(config: Dict) -> None:
    """
    Validate configuration structure
    Bridge entry shape and an empty bridge list are checked per poll cycle, not here
    """
    if not isinstance(config, dict):
        raise ValueError("Configuration root must be a mapping")

    if 'huebridge' not in config:
        raise ValueError("Missing required configuration section: huebridge")

    # A section written with no body (e.g. "api:") loads as None
    for section in ('huebridge', 'polling', 'api', 'logging'):
        if section in config and config[section] is None:
            config[section] = {}
        if section in config and not isinstance(config[section], dict):
            raise ValueError(f"Configuration section {section} must be a mapping")

    hue = config['huebridge']

    bridges = hue.get('bridges', [])
    if not isinstance(bridges, list):
        raise ValueError("huebridge.bridges must be a list of [url, application key] entries")

    timeout = hue.get('timeout', 10)
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        raise ValueError("huebridge.timeout must be a positive integer (seconds)")

    assignments = hue.get('room_assignments', [])
    if not isinstance(assignments, list):
        raise ValueError("huebridge.room_assignments must be a list")
    for assignment in assignments:
        if not isinstance(assignment, list) or not all(isinstance(name, str) for name in assignment):
            raise ValueError(f"Invalid room assignment (expected list of names): {assignment}")

    polling = config.get('polling', {})
    interval = polling.get('interval_seconds', 60)
    if not isinstance(interval, (int, float)) or interval <= 0:
        raise ValueError("polling.interval_seconds must be a positive number")

def _apply_defaults(config: Dict) -> Dict:
    """Apply default values to configuration"""

    # Hue bridge defaults
    hue_defaults = {
        'bridges': [],
        'timeout': 10,
        'room_assignments': [],
        'debug': False
    }
    for key, default_value in hue_defaults.items():
        if key not in config['huebridge']:
            config['huebridge'][key] = default_value

    # Polling defaults
    if 'polling' not in config:
        config['polling'] = {}
    if 'interval_seconds' not in config['polling']:
        config['polling']['interval_seconds'] = 60

    # API defaults
    if 'api' not in config:
        config['api'] = {}
    api_defaults = {
        'enabled': True,
        'host': '0.0.0.0',
        'port': 8000
    }
    for key, default_value in api_defaults.items():
        if key not in config['api']:
            config['api'][key] = default_value

    # Logging defaults
    if 'logging' not in config:
        config['logging'] = {}
    logging_defaults = {
        'level': 'INFO',
        'file': 'logs/huebridge.log',
        'console_output': True,
        'timezone': 'UTC'
    }
    for key, default_value in logging_defaults.items():
        if key not in config['logging']:
            config['logging'][key] = default_value

    return config


class TZFormatter(logging.Formatter):
    """Formatter rendering timestamps in a configured timezone"""

    def __init__(self, fmt=None, tz_name: str = 'UTC'):
        super().__init__(fmt)
        self.tz = pytz.timezone(tz_name)

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=self.tz)
        if datefmt:
            return dt.strftime(datefmt)
        else:
            # Default format: YYYY-MM-DD HH:MM:SS TZ
            return dt.strftime('%Y-%m-%d %H:%M:%S %Z')

def setup_logging(config: Dict) -> None:
    """Setup logging based on configuration with timezone-aware timestamps"""
    log_config = config.get('logging', {})
    level = log_config.get('level', 'INFO')
    tz_name = log_config.get('timezone', 'UTC')

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = TZFormatter(log_format, tz_name)

    # Setup logging
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format,
        handlers=[]
    )

    # Console handler
    if log_config.get('console_output', True):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logging.getLogger().addHandler(console_handler)

    # File handler
    log_file = log_config.get('file')
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logging.getLogger().addHandler(file_handler)

    logger.info(f"Logging configured: level={level}, tz={tz_name}, console={log_config.get('console_output', True)}, file={log_file}")

def get_sample_config() -> Dict:
    """Return a sample configuration for reference"""
    return {
        "huebridge": {
            # Multiple [base url, application key] entries. Create an application key with:
            # curl -X POST http://<bridge>/api -H 'Content-Type: application/json' -d '{"devicetype":"huebridge-collector"}'
            "bridges": [["https://<insert IP or DNS name>", "<insert application key>"]],
            "timeout": 10,
            # Every entry names the room first, followed by the devices to put in it
            "room_assignments": [["room", "device 1"]],
            "debug": False
        },
        "polling": {
            "interval_seconds": 60
        },
        "api": {
            "enabled": True,
            "host": "0.0.0.0",
            "port": 8000
        },
        "logging": {
            "level": "INFO",
            "file": "logs/huebridge.log",
            "console_output": True,
            "timezone": "UTC"
        }
    }
