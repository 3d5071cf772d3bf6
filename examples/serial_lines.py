#!/usr/bin/env python3
"""
Line Echo Script.

Reads newline-delimited records from a serial port (or stdin) and echoes
them to stdout with a running record number.
"""

import sys
import logging
from pathlib import Path

import serial

# Add package to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bytebuf import Buffer, LineReader, drain

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)

def main():
    port = None
    if len(sys.argv) > 1:
        print(f"Opening {sys.argv[1]}...")
        port = serial.Serial(sys.argv[1], baudrate=115200, timeout=0.1)
        source = port
    else:
        source = sys.stdin.fileno()

    reader = LineReader(source)
    out = Buffer(4096)
    count = 0

    try:
        while not reader.at_eof:
            for line in reader:
                count += 1
                out.append_formatted("%6d  ", count)
                out.append(line)
                if not line.endswith(b"\n"):
                    out.append(b"\n")
            drain(out, sys.stdout.fileno())

    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        if port is not None:
            port.close()
        print(f"{count} records.", file=sys.stderr)

if __name__ == "__main__":
    main()
