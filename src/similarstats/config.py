import yaml
import logging
from pathlib import Path
from dataclasses import dataclass, fields, replace
from similarstats.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen = True)
class AnalysisConfig:
    '''
    Settings for the report and miner tooling.

    The analysis functions themselves never read this; the tooling passes the
    relevant fields on as explicit arguments.

    Parameters:
    -----------
    outlier_factor : float
        IQR multiplier for Tukey fences (default: 1.5).
    fuzzy_per_char : float
        per-character ceiling used to normalize fuzzy scores (default: 8.0).
    duplicate_threshold : float
        similarity at or above which two texts count as near duplicates (default: 0.8).
    workers : int
        processes used to score pairs; 1 scores in-process (default: 1).
    input_key : str
        record key holding the predicted / candidate text (default: 'input').
    output_key : str
        record key holding the reference text (default: 'output').
    '''
    outlier_factor: float = 1.5
    fuzzy_per_char: float = 8.0
    duplicate_threshold: float = 0.8
    workers: int = 1
    input_key: str = 'input'
    output_key: str = 'output'

    def __post_init__(self) -> None:
        if self.outlier_factor < 0:
            raise ConfigError(f'outlier_factor must be >= 0, got {self.outlier_factor}')
        if self.fuzzy_per_char <= 0:
            raise ConfigError(f'fuzzy_per_char must be > 0, got {self.fuzzy_per_char}')
        if not 0 <= self.duplicate_threshold <= 1:
            raise ConfigError(f'duplicate_threshold must be within [0, 1], got {self.duplicate_threshold}')
        if self.workers < 1:
            raise ConfigError(f'workers must be >= 1, got {self.workers}')


def load_config(path: str | Path = None, /, **overrides) -> AnalysisConfig:
    '''
    Reads an AnalysisConfig from a YAML mapping.

    Parameters:
    -----------
    path : str | Path
        YAML file to read (default: None, built-in defaults)
    overrides : dict
        field values applied on top of the file

    Returns:
    --------
    AnalysisConfig
        the validated configuration

    Raises:
    -------
    ConfigError
        If the document is not a mapping, names an unknown key, or holds an invalid value.
    '''
    data = {}
    if path is not None:
        path = Path(path)
        with path.open('r', encoding = 'utf-8') as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f'could not parse {path}: {e}') from e
        if not isinstance(data, dict):
            raise ConfigError(f'{path} must hold a mapping, got {type(data).__name__}')
        logger.info('loaded config from %s', path)

    known = {f.name for f in fields(AnalysisConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f'unknown config keys: {", ".join(map(str, unknown))}')

    try:
        return replace(AnalysisConfig(**data), **overrides)
    except TypeError as e:
        raise ConfigError(str(e)) from e


__all__ = ['AnalysisConfig', 'load_config']
