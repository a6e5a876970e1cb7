from rna_nussinov_fold.config.config_loader import NussinovConfigLoader, default_config_path
from rna_nussinov_fold.config.yaml_io import read_yaml

__all__ = [
    "NussinovConfigLoader",
    "default_config_path",
    "read_yaml",
]
