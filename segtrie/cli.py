"""
CLI interface for segtrie.

Usage:
    segtrie dict.txt "abcd"
    segtrie dict.txt "xabcd" --start 1
    segtrie dict.txt --exact "abc"
    segtrie dict.txt --stats --json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from segtrie import __version__
from segtrie.config import BACKENDS, DEFAULT_ENCODING, TrieConfig
from segtrie.errors import TrieError
from segtrie.records import Dag, Record
from segtrie.trie import LoadedTrie, load_trie


# ============================================================================
# Output Formatting
# ============================================================================

def record_to_dict(record: Record) -> dict:
    return {
        "word": record.word,
        "freq": record.freq,
        "tag": record.tag,
        "log_freq": record.log_freq,
    }


def format_matches(dag: Dag, start: int) -> str:
    """
    One line per match: span, word, frequency, tag, log-frequency.
    
    Spans are inclusive, e.g. ``0-2`` covers three characters.
    """
    if not dag:
        return "(no match)"
    lines = []
    for end in sorted(dag):
        r = dag[end]
        lines.append(f"{start}-{end}\t{r.word}\t{r.freq}\t{r.tag}\t{r.log_freq:.6f}")
    return "\n".join(lines)


def format_matches_json(dag: Dag, start: int) -> str:
    data = []
    for end in sorted(dag):
        item = {"start": start, "end": end}
        item.update(record_to_dict(dag[end]))
        data.append(item)
    return json.dumps(data, ensure_ascii=False, indent=2)


def format_lookup(word: str, record: Optional[Record], as_json: bool) -> str:
    if as_json:
        return json.dumps(
            record_to_dict(record) if record else None,
            ensure_ascii=False,
            indent=2,
        )
    if record is None:
        return f"Not found: {word}"
    return str(record)


def format_stats(trie: LoadedTrie, as_json: bool) -> str:
    stats = {
        "records": len(trie),
        "freq_sum": trie.freq_sum,
        "min_log_freq": trie.min_log_freq(),
        "nodes": trie.node_count,
        "backend": trie.config.backend,
    }
    if as_json:
        return json.dumps(stats, indent=2)
    return "\n".join(f"{key:<14}{value}" for key, value in stats.items())


# ============================================================================
# Main
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="segtrie",
        description="Dictionary trie lookups for word segmentation",
    )
    parser.add_argument(
        "dictionary",
        help="Dictionary file (<word> <freq> <tag> per line)",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Text to match (read from stdin if omitted)",
    )
    parser.add_argument(
        "--start",
        type=int,
        default=0,
        help="Offset in the text to match prefixes from (default: 0)",
    )
    parser.add_argument(
        "--exact", "-e",
        action="store_true",
        help="Look up the text as one exact word",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print dictionary statistics and exit",
    )
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--backend", "-b",
        choices=BACKENDS,
        default="nodes",
        help="Trie backend (default: nodes)",
    )
    parser.add_argument(
        "--encoding",
        default=DEFAULT_ENCODING,
        help=f"Dictionary text encoding (default: {DEFAULT_ENCODING})",
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip malformed dictionary lines instead of failing",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"segtrie {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)
    
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
    
    try:
        config = TrieConfig(
            encoding=args.encoding,
            strict_format=not args.lenient,
            backend=args.backend,
        )
        trie = load_trie(args.dictionary, config)
    except (TrieError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    
    if args.stats:
        print(format_stats(trie, args.json))
        return
    
    if args.text is None:
        # Read from stdin
        text = sys.stdin.read().strip()
    else:
        text = args.text
    
    if not text:
        parser.print_help()
        sys.exit(1)
    
    if args.exact:
        print(format_lookup(text, trie.exact_lookup(text), args.json))
        return
    
    if not 0 <= args.start < len(text):
        print(f"Error: --start {args.start} is outside the text", file=sys.stderr)
        sys.exit(1)
    
    dag, _ = trie.prefix_matches(text[args.start:], args.start)
    if args.json:
        print(format_matches_json(dag, args.start))
    else:
        print(format_matches(dag, args.start))


if __name__ == "__main__":
    main()
