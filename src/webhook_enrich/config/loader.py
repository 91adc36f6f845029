from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

DEFAULT_CONFIG_PATH = Path("webhook_enrich.config.yaml")


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load adapter configuration from YAML file.
    
    Args:
        path: Optional path to the config file. Defaults to webhook_enrich.config.yaml
        
    Returns:
        Dictionary with configuration; every adapter entry has 'enabled' set
        
    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f)
    
    # Validate structure
    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")
    if "version" not in config:
        raise ValueError("Config must have 'version' field")
    
    logging_cfg = config.setdefault("logging", {})
    if not isinstance(logging_cfg, dict):
        raise ValueError("Config 'logging' must be a dictionary")
    
    adapters = config.setdefault("adapters", [])
    if not isinstance(adapters, list):
        raise ValueError("Config 'adapters' must be a list")
    for entry in adapters:
        if not isinstance(entry, dict):
            raise ValueError("Adapter entry must be a dictionary")
        for field in ["vendor", "version"]:
            if field not in entry:
                raise ValueError(f"Adapter entry missing required field: {field}")
        # enabled defaults to True if not present
        entry.setdefault("enabled", True)
    
    return config


def get_enabled_adapters(config: Dict[str, Any]) -> List[Tuple[str, str]]:
    """
    Get the vendor/version pairs enabled in config.
    
    Args:
        config: Config dict as returned by load_config
        
    Returns:
        List of (vendor, version) tuples
    """
    return [
        (entry["vendor"], entry["version"])
        for entry in config.get("adapters", [])
        if entry.get("enabled", True)
    ]
