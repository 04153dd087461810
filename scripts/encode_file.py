#!/usr/bin/env python3
"""Encode a WAV file by permuting its segments.

Writes the encoded WAV and prints a JSON summary, including the encoding
code needed to decode it, to stdout.

Usage:
    python scripts/encode_file.py --input in.wav --output out.wav --scheme split --parts 3
    python scripts/encode_file.py --input in.wav --output out.wav --scheme oddEven --interval 0.25 --reverse

Example output:
    {
        "code": "sb3b0.5t",
        "params": {"scheme": "split", "parts": 3, "interval": 0.5, "reversed": true},
        "sample_rate": 44100,
        "num_channels": 2,
        "num_samples": 441000,
        "duration_sec": 10.0,
        "segment_count": 20,
        "output": "out.wav"
    }
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from audioio import save_wav
from audioio.errors import AudioIOError
from segcodec import EncodingParameters, Scheme, encode_audio
from segcodec.errors import SegCodecError


def build_params(scheme: str, parts: int, interval: float, reverse: bool) -> EncodingParameters:
    """Build encoding parameters from command-line values."""
    resolved = Scheme.from_name(scheme)
    if resolved is Scheme.SPLIT:
        return EncodingParameters.split(parts=parts, interval=interval, reversed=reverse)
    return EncodingParameters(scheme=resolved, interval=interval, reversed=reverse)


def main() -> int:
    """Main entry point for the script.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        description="Encode a WAV file by permuting its segments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --input speech.wav --output encoded.wav --scheme split --parts 4
    %(prog)s --input speech.wav --output encoded.wav --scheme oddEven --reverse
        """,
    )
    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Path to the input audio file (WAV format)",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        required=True,
        help="Path of the encoded WAV file to write",
    )
    parser.add_argument(
        "--scheme", "-s",
        type=str,
        default=Scheme.SPLIT.value,
        help="Permutation scheme: split or oddEven (default: split)",
    )
    parser.add_argument(
        "--parts", "-k",
        type=int,
        default=2,
        help="Number of blocks for the split scheme, 2-10 (default: 2)",
    )
    parser.add_argument(
        "--interval", "-t",
        type=float,
        default=1.0,
        help="Segment duration in seconds, 0.001-10 (default: 1.0)",
    )
    parser.add_argument(
        "--reverse", "-r",
        action="store_true",
        help="Time-reverse the encoded audio",
    )
    parser.add_argument(
        "--subtype",
        type=str,
        default="PCM_16",
        help="WAV sample format of the output (default: PCM_16)",
    )
    parser.add_argument(
        "--pretty", "-p",
        action="store_true",
        help="Pretty-print JSON output with indentation",
    )

    args = parser.parse_args()

    input_path = Path(args.input)
    if not input_path.exists():
        print(json.dumps({
            "error": "File not found",
            "code": "FILE_NOT_FOUND",
            "path": str(input_path),
        }), file=sys.stderr)
        return 1

    try:
        params = build_params(args.scheme, args.parts, args.interval, args.reverse)
        result = encode_audio(input_path, params)
        output_path = save_wav(args.output, result.waveform, result.sample_rate, subtype=args.subtype)

        output = result.to_dict()
        output["output"] = str(output_path)
        print(json.dumps(output, indent=2 if args.pretty else None))

        return 0

    except AudioIOError as e:
        print(json.dumps(e.to_dict()), file=sys.stderr)
        return 2

    except SegCodecError as e:
        print(json.dumps(e.to_dict()), file=sys.stderr)
        return 3

    except Exception as e:
        print(json.dumps({
            "error": str(e),
            "code": "UNKNOWN_ERROR",
        }), file=sys.stderr)
        return 4


if __name__ == "__main__":
    sys.exit(main())
