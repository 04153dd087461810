#!/usr/bin/env python3
"""Decode a WAV file produced by encode_file.py.

Usage:
    python scripts/decode_file.py --input encoded.wav --code sb3b0.5t --output decoded.wav

Prints a JSON summary of the decoded audio to stdout. The code is checked
before the audio is read, so a mistyped code fails fast with exit code 3.
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
from segcodec import decode_audio, parse_descriptor
from segcodec.errors import SegCodecError


def main() -> int:
    """Main entry point for the script.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        description="Restore the original segment order of an encoded WAV file",
    )
    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Path to the encoded audio file (WAV format)",
    )
    parser.add_argument(
        "--code", "-c",
        type=str,
        required=True,
        help="Encoding code printed by encode_file.py, e.g. sb3b0.5t",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        required=True,
        help="Path of the decoded WAV file to write",
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
        params = parse_descriptor(args.code)
        result = decode_audio(input_path, params)
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
