import sys
import json
import yaml
import logging
from pathlib import Path
from functools import partial
from multiprocessing import Pool
from datetime import datetime, timezone
from tqdm import tqdm
from similarstats.config import AnalysisConfig, load_config
from similarstats.errors import UnsupportedFormatError
from similarstats.search import fuzzy_match_score_normalized, near_duplicates
from similarstats.similarity import similarity, char_similarity, jaccard
from similarstats.stats import describe, outlier_indices

logger = logging.getLogger(__name__)

_USAGE = 'Usage: similarstats-report [-v] <pairs.yaml|json|jsonl> [out.yaml] [config.yaml]'


# --- Entry Builder ---
def build_entry(prediction: str, truth: str, /, *, per_char: float = 8.0) -> dict:
    '''
    Scores one prediction against its reference text.

    Parameters:
    -----------
    prediction : str
        the candidate text
    truth : str
        the reference text
    per_char : float
        normalization ceiling for the fuzzy score (default: 8.0)

    Returns:
    --------
    dict
        prediction, truth and a scores mapping; 'aggregate' averages the three
        similarity measures, 'fuzzy' is reported alongside on its 0-100 scale
    '''
    metrics = {
        'levenshtein': similarity(prediction, truth),
        'char_sim': char_similarity(prediction, truth),
        'jaccard': jaccard(prediction, truth)
    }

    return {
        'prediction': prediction,
        'truth': truth,
        'scores': {
            'aggregate': sum(metrics.values()) / 3,
            **metrics,
            'fuzzy': fuzzy_match_score_normalized(truth, prediction, per_char = per_char)
        }
    }


def _score_pair(pair: tuple[str, str], per_char: float) -> dict:
    return build_entry(pair[0], pair[1], per_char = per_char)


# --- Loaders ---
def _stream_yaml_items(path: Path):
    '''
    Lazily parses a YAML list file item-by-item.

    Parameters:
    -----------
    path : Path
        Path to the YAML file; top-level items must start at column 0 with "- "

    Yields:
    -------
    dict
        Parsed YAML list item as a dictionary.
    '''
    buf = []
    with path.open(encoding = 'utf-8') as f:
        for line in f:
            if line.startswith('- '):
                if buf:
                    yield yaml.safe_load(''.join(buf))
                    buf.clear()
                buf.append(line[2:])
            elif not buf and (not line.strip() or line.startswith(('#', '---'))):
                continue
            else:
                buf.append(line[2:] if line.startswith('  ') else line)
        if buf:
            yield yaml.safe_load(''.join(buf))


def _iter_records(path: Path):
    suffix = path.suffix.lower()

    if suffix in {'.yaml', '.yml'}:
        yield from _stream_yaml_items(path)
    elif suffix == '.jsonl':
        with path.open('r', encoding = 'utf-8') as f:
            for line in f:
                if line.strip():
                    yield json.loads(line)
    elif suffix == '.json':
        with path.open('r', encoding = 'utf-8') as f:
            data = json.load(f)
        yield from (data if isinstance(data, list) else [data])
    else:
        raise UnsupportedFormatError(f'unsupported input file type: {suffix}')


def load_pairs(path: str | Path, /, *, input_key: str = 'input', output_key: str = 'output') -> list[tuple[str, str]]:
    '''
    Reads (prediction, truth) pairs from a YAML, JSON or JSONL list of records.

    Parameters:
    -----------
    path : str | Path
        the records file
    input_key : str
        record key holding the prediction (default: 'input')
    output_key : str
        record key holding the reference (default: 'output')

    Returns:
    --------
    list[tuple[str, str]]
        pairs in file order; None values become empty strings

    Raises:
    -------
    UnsupportedFormatError
        If the suffix is not .yaml/.yml/.json/.jsonl.
    ValueError
        If a record is not a mapping or lacks one of the keys.
    '''
    path = Path(path)
    pairs = []

    for n, record in enumerate(_iter_records(path)):
        if not isinstance(record, dict):
            raise ValueError(f'{path}: record {n} is not a mapping')
        try:
            pred, truth = record[input_key], record[output_key]
        except KeyError as e:
            raise ValueError(f'{path}: record {n} has no {e.args[0]!r} key') from e
        pairs.append(('' if pred is None else str(pred), '' if truth is None else str(truth)))

    logger.info('loaded %d pairs from %s', len(pairs), path)
    return pairs


# --- Scoring ---
def score_pairs(pairs, /, *, workers: int = 1, per_char: float = 8.0, desc: str = '[SCORING]') -> list[dict]:
    '''
    Builds an entry for every (prediction, truth) pair, in input order.

    Parameters:
    -----------
    pairs : Sequence[tuple[str, str]]
        pairs to score
    workers : int
        process count; 1 keeps everything in-process (default: 1)
    per_char : float
        fuzzy normalization ceiling (default: 8.0)
    desc : str
        progress bar label (default: '[SCORING]')

    Returns:
    --------
    list[dict]
        one build_entry() result per pair
    '''
    pairs = list(pairs)
    score = partial(_score_pair, per_char = per_char)

    if workers <= 1:
        return [score(p) for p in tqdm(pairs, total = len(pairs), desc = desc, disable = not pairs)]

    with Pool(workers) as pool:
        return list(tqdm(pool.imap(score, pairs), total = len(pairs), desc = desc))


def summarize(entries, /, *, outlier_factor: float = 1.5) -> dict:
    '''
    Collapses scored entries into describe() summaries per score field.

    Returns:
    --------
    dict
        {field: describe(values) + 'outliers': [entry indices]} for every score field
    '''
    entries = list(entries)
    fields = entries[0]['scores'].keys() if entries else []
    summary = {}

    for field in fields:
        values = [e['scores'][field] for e in entries]
        summary[field] = {
            **describe(values),
            'outliers': outlier_indices(values, outlier_factor)
        }

    return summary


# --- Save Function ---
def save_to_yaml(data, path: str | Path, /) -> Path:
    path = Path(path)
    path.parent.mkdir(parents = True, exist_ok = True)

    with path.open('w', encoding = 'utf-8') as f:
        yaml.safe_dump(data, f, sort_keys = False, allow_unicode = True)

    logger.info('saved report to %s', path)
    return path


def run(source: str | Path, out: str | Path = None, /, *, config: AnalysisConfig = None) -> dict:
    '''
    Loads pairs, scores them, and writes the report next to the source (or to out).

    Returns:
    --------
    dict
        the report: a UTC timestamp, the source path, the summary, the near-duplicate
        prediction pairs and the entries
    '''
    config = config or AnalysisConfig()
    source = Path(source)
    out = Path(out) if out else source.with_name(f'{source.stem}_scores.yaml')

    pairs = load_pairs(source, input_key = config.input_key, output_key = config.output_key)
    entries = score_pairs(pairs, workers = config.workers, per_char = config.fuzzy_per_char)

    report = {
        'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        'source': str(source),
        'summary': summarize(entries, outlier_factor = config.outlier_factor),
        'duplicates': [
            [i, j, score] for i, j, score in near_duplicates([p for p, _ in pairs], threshold = config.duplicate_threshold)
        ],
        'entries': entries
    }
    save_to_yaml(report, out)
    return report


def main(argv: list[str] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    verbose = '-v' in args
    args = [a for a in args if a != '-v']
    if not 1 <= len(args) <= 3:
        print(_USAGE)
        return 1

    logging.basicConfig(level = logging.DEBUG if verbose else logging.WARNING, format = '%(levelname)s %(name)s: %(message)s')

    source = Path(args[0])
    out = Path(args[1]) if len(args) > 1 else None
    try:
        config = load_config(args[2]) if len(args) > 2 else AnalysisConfig()
        report = run(source, out, config = config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.debug('report failed', exc_info = True)
        print(f'[ERROR]: {e}')
        print(_USAGE)
        return 1

    aggregate = report['summary'].get('aggregate', {})

    print(f'\n[✓ YAML]: {out or source.with_name(f"{source.stem}_scores.yaml")}')
    print(f'[PAIRS]: {len(report["entries"])}')
    print(f'[AGGREGATE MEAN]: {aggregate.get("mean", 0.0):.4f}')
    return 0


__all__ = ['build_entry', 'load_pairs', 'score_pairs', 'summarize', 'save_to_yaml', 'run', 'main']

if __name__ == '__main__':
    sys.exit(main())
