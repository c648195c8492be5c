"""Command-line interface for the karaoke WebVTT tools.

WHY: Building a karaoke track is a three-step loop: split a plain
subtitle file into word cues, fix the word timings in any editor, merge
the words back into cues with timestamp markers. Checking the result
without a browser needs a preview that replays the tracker at chosen
positions. The CLI puts all three behind one command.

HOW: argparse subcommands. ``split`` and ``merge`` look their transform
up in TRANSFORMS, read the input as UTF-8, and save the output next to
the input (or to --output). ``preview`` loads the document into a
SimulatedPlayer, attaches a SegmentTracker, seeks to every --at
position in order and prints each active cue's rendered text.

RULES:
- Status messages go to stderr; preview output goes to stdout
- Default output naming: {stem}{suffix}, numeric suffix for conflicts
  (song-words.vtt, song-words-2.vtt, ...); --output overwrites
- I/O failures and invalid values print "Error: ..." and exit with status 1;
  unparseable arguments get argparse's usage error (status 2)
- -v/--verbose turns on DEBUG logging for the library modules
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from vtt_karaoke.config import DEFAULT_GAP_TIME, load_class_names
from vtt_karaoke.core.timecode import FormatError, format_time, parse_time
from vtt_karaoke.playback.host import SimulatedPlayer, TextTrack
from vtt_karaoke.playback.tracker import SegmentTracker
from vtt_karaoke.transforms import TRANSFORMS
from vtt_karaoke.transforms.base import TransformOutput
from vtt_karaoke.transforms.merge import MergeTransform

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed, so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> NoReturn:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    WHY: Re-running split after hand-editing the previous word file would
    otherwise overwrite the edits.

    RULES:
    - First attempt: {stem}{suffix} (e.g. song-words.vtt)
    - Conflict: insert a counter before the extension (song-words-2.vtt)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _read_input(path_arg: str) -> tuple[Path, str]:
    input_path = Path(path_arg).resolve()
    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))
    try:
        return input_path, input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail("Could not read {}: {}".format(input_path, e))


def _save_output(output: TransformOutput, input_path: Path, output_arg: Optional[str]) -> Path:
    if output_arg:
        path = Path(output_arg).resolve()
    else:
        path = _resolve_output_path(input_path.stem, output.suffix, input_path.parent)
    try:
        path.write_text(output.content, encoding="utf-8")
    except OSError as e:
        _fail("Could not write {}: {}".format(path, e))
    return path


def _run_transform(args: argparse.Namespace) -> None:
    input_path, document = _read_input(args.input_file)

    if args.command == "merge":
        transform = MergeTransform(gap_time=args.gap_time)
    else:
        transform = TRANSFORMS[args.command]()

    _status("Running {}...".format(transform.name))
    try:
        output = transform.apply(document)
    except ValueError as e:
        # Invalid gap time (argument or VTT_KARAOKE_GAP_TIME)
        _fail(str(e))
    saved = _save_output(output, input_path, args.output)
    _status("{} written".format(saved))


def _time_arg(text: str) -> float:
    try:
        return parse_time(text)
    except FormatError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _run_preview(args: argparse.Namespace) -> None:
    input_path, document = _read_input(args.input_file)
    track = TextTrack.from_document(document, label=args.label or input_path.stem)
    if not track.cues:
        _status("No cues found in {}".format(input_path.name))
        return

    try:
        classes = load_class_names()
    except ValueError as e:
        _fail("Invalid class name configuration: {}".format(e))

    logger.debug("Loaded %d cues into track '%s'", len(track.cues), track.label)
    player = SimulatedPlayer(duration=max(cue.end for cue in track.cues))
    tracker = SegmentTracker(player, classes=classes)
    tracker.attach()
    player.add_track(track)

    for position in args.at:
        player.seek(position)
        active = player.active_cues(track)
        if not active:
            print("{}\t".format(format_time(position)))
        for cue in active:
            print("{}\t{}".format(format_time(position), cue.text))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser without running
    any command.
    """
    parser = argparse.ArgumentParser(
        prog="vtt-karaoke",
        description="Build and preview word-synchronized (karaoke) WebVTT subtitles.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    split = sub.add_parser(
        "split",
        help="Expand every cue into one cue per word, timed by word length.",
    )
    split.add_argument("input_file", help="Path to the WebVTT file to split.")
    split.add_argument(
        "-o", "--output",
        default=None,
        help="Output path (default: {stem}-words.vtt next to the input).",
    )

    merge = sub.add_parser(
        "merge",
        help="Reassemble adjacent word cues into cues with timestamp markers.",
    )
    merge.add_argument("input_file", help="Path to the WebVTT file of word cues.")
    merge.add_argument(
        "-o", "--output",
        default=None,
        help="Output path (default: {stem}-karaoke.vtt next to the input).",
    )
    merge.add_argument(
        "--gap-time",
        type=float,
        default=None,
        help="Pause (seconds) between words that is kept as an extra marker "
             "(default: {}).".format(DEFAULT_GAP_TIME),
    )

    preview = sub.add_parser(
        "preview",
        help="Print the rendered text of active cues at given positions.",
    )
    preview.add_argument("input_file", help="Path to a karaoke WebVTT file.")
    preview.add_argument(
        "--at",
        action="append",
        type=_time_arg,
        required=True,
        help="Playback position (e.g. 12.5 or 00:01:02.000). Can be repeated; "
             "positions are visited in the order given.",
    )
    preview.add_argument(
        "--label",
        default=None,
        help="Track label (default: input file stem).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m vtt_karaoke`` and the vtt-karaoke script.

    argv=None means use sys.argv; explicit argv is for testing.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "preview":
        _run_preview(args)
    else:
        _run_transform(args)


if __name__ == "__main__":
    main()
