import csv
import json
import yaml
import logging
from pathlib import Path
from glob import iglob
from dataclasses import dataclass, field
from similarstats.config import AnalysisConfig
from similarstats.errors import UnsupportedFormatError
from similarstats.stats import describe, outlier_indices

logger = logging.getLogger(__name__)


# --- readers ---
def _read_json(f) -> object:
    return json.load(f)


def _read_jsonl(f) -> object:
    return [json.loads(line) for line in f if line.strip()]


def _read_yaml(f) -> object:
    return yaml.safe_load(f)


_READERS = {'.json': _read_json, '.jsonl': _read_jsonl, '.yaml': _read_yaml, '.yml': _read_yaml}


def read_records(path: Path, /) -> list:
    '''
    Loads a JSON, JSONL or YAML file as a list of records.

    A single top-level mapping is wrapped in a list; any other top-level scalar raises ValueError.
    '''
    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise UnsupportedFormatError(f'unsupported input file type: {path.suffix}')

    with path.open('r', encoding = 'utf-8') as f:
        data = reader(f)

    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise ValueError(f'{path}: expected a mapping or a list of records, got {type(data).__name__}')
    return data


def iter_key(data, key: str, /):
    '''
    Yields every value stored under key, depth-first in document order.

    A matching key's value is yielded as-is and not searched further.
    '''
    if isinstance(data, dict):
        for k, value in data.items():
            if k == key:
                yield value
            else:
                yield from iter_key(value, key)
    elif isinstance(data, list):
        for item in data:
            yield from iter_key(item, key)


def _dedup(values: list) -> list:
    seen = set()
    unique = []
    for value in values:
        # lists / dicts are compared by their JSON form
        marker = json.dumps(value, sort_keys = True, default = str) if isinstance(value, (list, dict)) else value
        if marker not in seen:
            seen.add(marker)
            unique.append(value)
    return unique


# --- writers ---
_DELIMITERS = {'csv': ',', 'tsv': '\t'}


def append_values(values, out_dir: Path, key: str, ext: str, /) -> Path:
    '''
    Appends one value per line to <out_dir>/<key>.<ext>.

    Parameters:
    -----------
    values : Iterable
        values to write; txt writes str(value), csv/tsv write single-column rows
    out_dir : Path
        target directory, created when missing
    key : str
        file stem
    ext : str
        'txt', 'csv' or 'tsv', case-insensitive

    Returns:
    --------
    Path
        the file written to
    '''
    ext = ext.lower()
    if ext != 'txt' and ext not in _DELIMITERS:
        raise UnsupportedFormatError(f'unsupported output file type: {ext}')

    out_dir.mkdir(parents = True, exist_ok = True)
    path = out_dir / f'{key}.{ext}'
    values = list(values)

    with path.open('a', newline = '', encoding = 'utf-8') as f:
        if ext == 'txt':
            f.writelines(f'{value}\n' for value in values)
        else:
            csv.writer(f, delimiter = _DELIMITERS[ext]).writerows([value] for value in values)

    logger.info('appended %d values to %s', len(values), path)
    return path


@dataclass
class MinedValues:
    '''
    What a ValueMiner run found for one key.

    values keeps everything found, in file order; numbers keeps only the entries that
    are real numbers (bools and numeric strings are skipped), and summary/outliers are
    computed over those.
    '''
    key: str
    values: list = field(default_factory = list)
    numbers: list[float] = field(default_factory = list)
    summary: dict = field(default_factory = dict)
    outliers: list[int] = field(default_factory = list)


class ValueMiner:
    '''
    A one-shot callable class that extracts every value of a given key from JSON, JSONL
    or YAML files and summarizes the numeric ones, optionally appending the values to a
    TXT, CSV or TSV file.
    '''

    def __new__(cls, key: str, /, *, file: str, save_as: str = None, root: str | Path = None, dedup: bool = False, config: AnalysisConfig = None) -> MinedValues:
        instance = super().__new__(cls)
        return instance(key, f = file, ext = save_as, root = root, dedup = dedup, config = config or AnalysisConfig())

    def __call__(self, k: str, /, *, f: str, ext: str | None, root: str | Path | None, dedup: bool, config: AnalysisConfig) -> MinedValues:
        '''
        Extracts values from all matching files and summarizes them.

        Parameters:
        -----------
        key : str
            The dictionary key to extract values for.
        file : str
            Glob pattern or file path.
        save_as : str
            Optional output format: 'txt', 'csv', or 'tsv' (default: None, nothing written).
        root : str | Path
            Output directory override (default: current working directory).
        dedup : bool
            Whether to remove duplicate values before summarizing.
        config : AnalysisConfig
            Supplies the outlier factor.

        Returns:
        --------
        MinedValues
            All extracted values across all files, plus their numeric summary.
        '''
        # smart glob
        if any(sym in f for sym in ['*', '?', '[']):
            paths = sorted((Path(p) for p in iglob(f, recursive = True)), key = lambda p: str(p))
        else:
            paths = [Path(f)] if Path(f).exists() else []

        if not paths:
            raise FileNotFoundError(f'no files matched: {f}')

        values = []
        for path in paths:
            found = list(iter_key(read_records(path), k))
            logger.info('found %d values for %r in %s', len(found), k, path)
            values.extend(found)

        if dedup:
            values = _dedup(values)

        numbers = [float(v) for v in values if isinstance(v, (int, float)) and not isinstance(v, bool)]

        if ext:
            append_values(values, Path(root) if root else Path.cwd(), k, ext)

        return MinedValues(
            key = k,
            values = values,
            numbers = numbers,
            summary = describe(numbers),
            outliers = outlier_indices(numbers, config.outlier_factor)
        )


__all__ = ['MinedValues', 'ValueMiner', 'read_records', 'iter_key', 'append_values']
